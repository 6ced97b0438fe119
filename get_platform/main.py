"""
get-platform — CLI entrypoint.

Usage:
    python -m get_platform.main --help
    python -m get_platform.main detect
    python -m get_platform.main distro --file /etc/os-release
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from get_platform import __version__
from get_platform.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="getplatform")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (shows every probe).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to getplatform.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """get-platform — resolve the native binary target for this host."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("GETPLATFORM_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("GETPLATFORM_LOG_FILE"),
        log_file_level=os.environ.get("GETPLATFORM_LOG_FILE_LEVEL"),
        quiet_probes=not debug,
    )


def _settings_or_exit(ctx: click.Context):
    from get_platform.core.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Resolve the platform tag for this host."""
    from get_platform.core.use_cases.detect import run_detect

    result = run_detect(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if ctx.obj.get("quiet"):
        click.echo(result.platform)
        return

    host = result.host
    assert host is not None  # guaranteed after error check above

    click.secho(f"\n🔍 Platform: {result.platform}", fg="cyan", bold=True)
    click.echo(f"   OS:      {host.platform}")
    click.echo(f"   Arch:    {host.arch}")
    if host.platform == "linux" or host.target_distro:
        click.echo(f"   Distro:  {host.original_distro or '?'} "
                   f"(family: {host.family_distro or '?'}, target: {host.target_distro or '?'})")
    if host.platform == "linux":
        click.echo(f"   libssl:  {host.libssl or '?'}")

    if not result.known:
        click.echo()
        click.secho(f"   ⚠️  No published binaries for {result.platform}", fg="yellow")

    click.echo()


@cli.command()
@click.option(
    "--file",
    "-f",
    "release_file",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Release file to classify (default: /etc/os-release).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def distro(ctx: click.Context, release_file: str | None, as_json: bool) -> None:
    """Classify the Linux distro from its release file."""
    from get_platform.core.services.distro import resolve_distro

    settings = _settings_or_exit(ctx)
    info = resolve_distro(Path(release_file) if release_file else settings.os_release_path)

    if as_json:
        click.echo(json.dumps(info.model_dump(), indent=2))
        return

    if info.original_distro is None:
        click.secho("   ✗ No release metadata found", fg="yellow")
        return

    click.echo(f"   Original: {info.original_distro}")
    click.echo(f"   Family:   {info.family_distro or '?'}")
    click.echo(f"   Target:   {info.target_distro or '?'}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def libssl(ctx: click.Context, as_json: bool) -> None:
    """Detect the libssl version this host links against."""
    from get_platform.core.services.distro import resolve_distro
    from get_platform.core.services.host import UnsupportedPlatformError, check_supported, snapshot
    from get_platform.core.services.libssl import get_ssl_version
    from get_platform.core.services.prober import CommandProber

    settings = _settings_or_exit(ctx)
    _, arch = snapshot()
    info = resolve_distro(settings.os_release_path)

    try:
        check_supported(info.target_distro, arch)
    except UnsupportedPlatformError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    version = get_ssl_version(
        arch=arch,
        target_distro=info.target_distro,
        prober=CommandProber(max_workers=settings.max_workers),
        openssl_binary=settings.openssl_binary,
    )

    if as_json:
        click.echo(json.dumps({"libssl": version, "arch": arch, "target_distro": info.target_distro}, indent=2))
        return

    if version is None:
        click.secho("   ✗ Could not detect libssl", fg="yellow")
        sys.exit(1)

    click.echo(version)


@cli.command()
def platforms() -> None:
    """List every platform tag with published binaries."""
    from get_platform.core.models.platform import PLATFORMS

    for tag in PLATFORMS:
        click.echo(tag)


if __name__ == "__main__":
    cli()
