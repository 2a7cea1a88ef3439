"""Manage secondary private IPs on EC2 network interfaces."""

__version__ = "0.1.0"
