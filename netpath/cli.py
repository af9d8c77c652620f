#!/usr/bin/env python3
"""Netpath CLI - Command-line interface for netpath."""

import click

from netpath.errors import NetpathError
from netpath.utils.env import EnvVarError, get_env
from netpath.utils.logger import Logger


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr")
def netpath(debug):
    """Netpath command-line tool for network interface and path checks."""
    if not Logger.is_configured():
        # WARNING keeps stdout clean; NETPATH_LOG_LEVEL or --debug raise it
        Logger.configure(
            level=get_env("NETPATH_LOG_LEVEL", default="WARNING"), timestamps=True
        )
    if debug:
        Logger.set_level("DEBUG")


@netpath.command()
@click.option(
    "--active",
    "scope",
    flag_value="active",
    help="Only interfaces that are up and not loopback",
)
@click.option(
    "--connected",
    "scope",
    flag_value="connected",
    help="Only active interfaces, and only if the internet is reachable",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON array")
def interfaces(scope, as_json):
    """List network interfaces."""
    from netpath.commands.interfaces_cmd import run_interfaces

    _run(run_interfaces, scope=scope or "all", as_json=as_json)


@netpath.command()
def reachable():
    """Check whether the host can reach the internet."""
    from netpath.commands.interfaces_cmd import run_reachable

    if not _run(run_reachable):
        raise SystemExit(1)


@netpath.command()
@click.option(
    "--parallel",
    is_flag=True,
    default=False,
    help="Run ping, download and upload probes concurrently",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option(
    "--details",
    is_flag=True,
    help="With --json, include each probe's status and failure reason",
)
@click.option(
    "--export-file",
    default=None,
    help="Also write the result to a JSON file",
)
def speedtest(parallel, as_json, details, export_file):
    """Measure ping latency, download and upload throughput."""
    from netpath.commands.speedtest_cmd import run_speedtest

    _run(
        run_speedtest,
        parallel=parallel,
        as_json=as_json,
        details=details,
        export_filename=export_file,
    )


@netpath.command()
@click.option(
    "--interface", "-i", "interface_name", default=None, help="Interface name"
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=1.0,
    help="Sampling window in seconds (default: 1.0)",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON array")
def rates(interface_name, interval, as_json):
    """Sample per-interface receive and transmit rates."""
    from netpath.commands.rates_cmd import run_rates

    _run(run_rates, interface_name=interface_name, interval=interval, as_json=as_json)


@netpath.command()
def version():
    """Display netpath version information."""
    from netpath import __version__

    print(f"netpath {__version__}")


def _run(command, **kwargs):
    """Invoke a command, rendering netpath, config and file errors as CLI errors."""
    try:
        return command(**kwargs)
    except (NetpathError, EnvVarError, ValueError, OSError) as e:
        Logger.get("cli").debug(f"{command.__name__} failed", exc_info=True)
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    netpath()
