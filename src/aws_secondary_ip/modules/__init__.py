"""AWS-facing building blocks: credentials, metadata, ENI and snapshots."""
