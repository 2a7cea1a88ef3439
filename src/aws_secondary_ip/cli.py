"""AWS Secondary IP CLI"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .config import SecondaryIPConfig, load_config
from .core import (
    ApiError,
    BaseDisplay,
    FileRunStateStore,
    OUTPUT_FORMATS,
    SecondaryIPError,
    secondary_ip_key,
    setup_logging,
)
from .modules.eni import ENIDisplay
from .secondary_ip import ReconcileResult, SecondaryIPResource

app = typer.Typer(
    name="aws-secondary-ip",
    help="Assign and release secondary private IPs on this instance's ENI",
    no_args_is_help=True,
)
console = Console()


class Ctx:
    def __init__(self):
        self.format: str = "table"
        self.debug: bool = False
        self.log_file: Optional[str] = None
        self.state_file: Optional[Path] = None


# Global context instance
gctx = Ctx()

ConfigOpt = typer.Option(None, "--config", "-c", help="YAML config file")
NameOpt = typer.Option(None, "--name", "-n", help="Action name (run-state key)")
IpOpt = typer.Option(None, "--ip", help="Secondary IP (default: let EC2 pick)")
InterfaceOpt = typer.Option(
    None, "--interface", "-i", help="OS interface (default: default route)"
)
RegionOpt = typer.Option(None, "--region", "-r", help="AWS region")
TimeoutOpt = typer.Option(
    None, "--timeout", "-t", help="Seconds to wait for EC2; 0 waits forever"
)
AccessKeyOpt = typer.Option(None, "--access-key", envvar="SECONDARY_IP_ACCESS_KEY")
SecretKeyOpt = typer.Option(None, "--secret-key", envvar="SECONDARY_IP_SECRET_KEY")
SessionTokenOpt = typer.Option(None, "--session-token")
RoleArnOpt = typer.Option(None, "--role-arn", help="IAM role to assume")
RoleSessionOpt = typer.Option(None, "--role-session-name")


def _config(
    config: Optional[Path],
    name: Optional[str] = None,
    ip: Optional[str] = None,
    interface: Optional[str] = None,
    region: Optional[str] = None,
    timeout: Optional[float] = None,
    access_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    session_token: Optional[str] = None,
    role_arn: Optional[str] = None,
    role_session_name: Optional[str] = None,
) -> SecondaryIPConfig:
    return load_config(
        config,
        name=name,
        ip=ip,
        interface=interface,
        region=region,
        timeout=timeout,
        aws_access_key=access_key,
        aws_secret_access_key=secret_key,
        aws_session_token=session_token,
        aws_assume_role_arn=role_arn,
        aws_role_session_name=role_session_name,
    )


def _resource(cfg: SecondaryIPConfig) -> SecondaryIPResource:
    return SecondaryIPResource(
        cfg,
        store=FileRunStateStore(gctx.state_file),
        on_status=lambda msg: console.print(f"[dim]{msg}[/]"),
    )


def _fail(e: Exception):
    console.print(
        f"{type(e).__name__}: {e}", style="red", markup=False, soft_wrap=True
    )
    raise typer.Exit(1)


def _show_result(result: ReconcileResult):
    display = BaseDisplay(console)
    if display.render(result.to_dict(), gctx.format):
        return
    display.print_outcome(
        f"{result.operation} secondary ip",
        {
            "ENI": result.eni_id,
            "IP": result.ip if result.operation == "assign" else result.requested_ip,
            "Addresses": ", ".join(sorted(result.after)),
            "Elapsed": f"{result.elapsed:.1f}s",
        },
        result.changed,
    )


@app.callback()
def _global(
    output_format: str = typer.Option("table", "--format", help="table|json|yaml"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Debug log file"),
    state_file: Optional[Path] = typer.Option(
        None, "--state-file", help="Run-state JSON file"
    ),
):
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]Invalid format: {output_format}[/]")
        raise typer.Exit(2)
    gctx.format = output_format
    gctx.debug = debug
    gctx.log_file = log_file
    gctx.state_file = state_file
    setup_logging(debug=debug, log_file=log_file)


@app.command()
def assign(
    config: Optional[Path] = ConfigOpt,
    name: Optional[str] = NameOpt,
    ip: Optional[str] = IpOpt,
    interface: Optional[str] = InterfaceOpt,
    region: Optional[str] = RegionOpt,
    timeout: Optional[float] = TimeoutOpt,
    access_key: Optional[str] = AccessKeyOpt,
    secret_key: Optional[str] = SecretKeyOpt,
    session_token: Optional[str] = SessionTokenOpt,
    role_arn: Optional[str] = RoleArnOpt,
    role_session_name: Optional[str] = RoleSessionOpt,
):
    """Assign a secondary IP (idempotent)"""
    try:
        cfg = _config(
            config, name, ip, interface, region, timeout,
            access_key, secret_key, session_token, role_arn, role_session_name,
        )
        result = _resource(cfg).assign()
    except (SecondaryIPError, *ApiError) as e:
        _fail(e)
    _show_result(result)


@app.command()
def unassign(
    config: Optional[Path] = ConfigOpt,
    name: Optional[str] = NameOpt,
    ip: Optional[str] = IpOpt,
    interface: Optional[str] = InterfaceOpt,
    region: Optional[str] = RegionOpt,
    timeout: Optional[float] = TimeoutOpt,
    access_key: Optional[str] = AccessKeyOpt,
    secret_key: Optional[str] = SecretKeyOpt,
    session_token: Optional[str] = SessionTokenOpt,
    role_arn: Optional[str] = RoleArnOpt,
    role_session_name: Optional[str] = RoleSessionOpt,
):
    """Release a previously assigned secondary IP (idempotent)"""
    try:
        cfg = _config(
            config, name, ip, interface, region, timeout,
            access_key, secret_key, session_token, role_arn, role_session_name,
        )
        result = _resource(cfg).unassign()
    except (SecondaryIPError, *ApiError) as e:
        _fail(e)
    _show_result(result)


@app.command()
def show(
    config: Optional[Path] = ConfigOpt,
    name: Optional[str] = NameOpt,
    interface: Optional[str] = InterfaceOpt,
    region: Optional[str] = RegionOpt,
    access_key: Optional[str] = AccessKeyOpt,
    secret_key: Optional[str] = SecretKeyOpt,
    session_token: Optional[str] = SessionTokenOpt,
    role_arn: Optional[str] = RoleArnOpt,
    role_session_name: Optional[str] = RoleSessionOpt,
):
    """Show the interface's ENI and its private IPs"""
    try:
        cfg = _config(
            config, name=name, interface=interface, region=region,
            access_key=access_key, secret_key=secret_key, session_token=session_token,
            role_arn=role_arn, role_session_name=role_session_name,
        )
        resource = _resource(cfg)
        eni = resource.describe()
        recorded = resource.store.get(secondary_ip_key(cfg.name))
    except (SecondaryIPError, *ApiError) as e:
        _fail(e)
    display = ENIDisplay(console)
    if not display.render(eni.to_dict(), gctx.format):
        display.show_interface(eni, highlight=recorded)


@app.command()
def snapshot(
    volume_id: str = typer.Argument(..., help="EBS volume ID"),
    most_recent: bool = typer.Option(
        False, "--most-recent", help="Newest instead of oldest"
    ),
    config: Optional[Path] = ConfigOpt,
    region: Optional[str] = RegionOpt,
    access_key: Optional[str] = AccessKeyOpt,
    secret_key: Optional[str] = SecretKeyOpt,
    session_token: Optional[str] = SessionTokenOpt,
    role_arn: Optional[str] = RoleArnOpt,
    role_session_name: Optional[str] = RoleSessionOpt,
):
    """Print the oldest (or newest) completed snapshot of a volume"""
    try:
        cfg = _config(
            config, region=region,
            access_key=access_key, secret_key=secret_key, session_token=session_token,
            role_arn=role_arn, role_session_name=role_session_name,
        )
        snapshot_id = _resource(cfg).find_snapshot_id(volume_id, most_recent)
    except (SecondaryIPError, *ApiError) as e:
        _fail(e)
    if not BaseDisplay(console).render(
        {"volume_id": volume_id, "snapshot_id": snapshot_id}, gctx.format
    ):
        console.print(snapshot_id)


@app.command("show-state")
def show_state(name: str = typer.Argument("default", help="Action name")):
    """Show the IP recorded for an action"""
    try:
        ip = FileRunStateStore(gctx.state_file).get(secondary_ip_key(name))
    except SecondaryIPError as e:
        _fail(e)
    if not BaseDisplay(console).render({"name": name, "ip": ip}, gctx.format):
        console.print(ip or "[dim]none[/]")


def main():
    app()


if __name__ == "__main__":
    main()
