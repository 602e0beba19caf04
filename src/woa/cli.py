"""Command-line interface for woa."""

import logging
import sys
from typing import TYPE_CHECKING, Optional

import click

from woa import __commit__, __date__, __version__
from woa.core.errors import WoaError

if TYPE_CHECKING:
    from woa.config.loader import Config


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_cfg() -> "Config":
    from woa.config.loader import resolve

    try:
        return resolve()
    except WoaError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ── Root group ────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="woa")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Wake machines on your network over UDP or HTTP."""
    _setup_logging(verbose)


# ── send command ─────────────────────────────────────────────────────────────


@main.command()
@click.option("--mac", "-m", help="MAC address of the device to wake up")
@click.option("--name", "-n", help="Name of the device to wake up")
@click.option(
    "--broadcast-ip",
    default="255.255.255.255",
    show_default=True,
    help="Broadcast address for the magic packet",
)
@click.option("--port", default=9, show_default=True, help="UDP port for the magic packet")
def send(mac: Optional[str], name: Optional[str], broadcast_ip: str, port: int) -> None:
    """Send a magic packet (or configured HTTP request) to wake a device."""
    if (mac is None) == (name is None):
        raise click.UsageError("either --mac or --name must be specified")

    from woa.core.dispatch import dispatch
    from woa.core.machine import WakeMethod

    config = _load_cfg() if name is not None else None
    try:
        report = dispatch(config, mac=mac, name=name, ip_address=broadcast_ip, port=port)
    except WoaError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if report.method is WakeMethod.HTTP:
        click.echo(f"HTTP wake sent to {report.endpoint} ({report.status_code})")
    else:
        click.echo(f"Magic packet sent to {report.address}")


# ── machines group ────────────────────────────────────────────────────────────


@main.group()
def machines() -> None:
    """Inspect configured machines."""


@machines.command("list")
def machines_list() -> None:
    """List all configured machines."""
    config = _load_cfg()
    if not config.machines:
        click.echo("No machines configured.")
        return
    click.echo(f"{'NAME':<24} {'MAC':<20} {'IP':<20} {'METHOD'}")
    click.echo("─" * 72)
    for m in config.machines:
        click.echo(f"{m.name:<24} {m.mac:<20} {m.ip or '-':<20} {m.wake_method.value}")


# ── version command ───────────────────────────────────────────────────────────


@main.command()
def version() -> None:
    """Print version information."""
    click.echo(f"woa {__version__}")
    click.echo(f"  commit: {__commit__}")
    click.echo(f"  built:  {__date__}")


if __name__ == "__main__":
    main()
