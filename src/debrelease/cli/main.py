"""
Main CLI entry point for debrelease.

This module provides the Click-based command-line interface for debrelease.
"""

from pathlib import Path
from typing import Optional

import click

from debrelease import __version__
from debrelease.core.config import GlobalConfig, create_example_config, load_config
from debrelease.core.output import OutputLevel, Outputter

from .release_commands import create_release_commands

# Click context settings to enable -h as alias for --help
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: /etc/debrelease/config.yaml, or $DEBRELEASE_CONFIG)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool, quiet: bool) -> None:
    """debrelease - Debian Release/InRelease codec.

    Parses, validates and canonically re-writes APT repository Release files.
    """
    ctx.ensure_object(dict)

    # Load configuration
    try:
        ctx.obj["config"] = load_config(config)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    except ValueError as e:
        # YAML syntax error or validation error
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    cfg: GlobalConfig = ctx.obj["config"]
    if quiet:
        level = OutputLevel.QUIET
    elif verbose or cfg.output.verbose:
        level = OutputLevel.VERBOSE
    else:
        level = OutputLevel.NORMAL
    ctx.obj["output"] = Outputter(level)


@cli.command("init-config")
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init_config(ctx: click.Context, output_path: Path, force: bool) -> None:
    """Write an example configuration file to OUTPUT_PATH."""
    out: Outputter = ctx.obj["output"]

    if output_path.exists() and not force:
        out.error(f"{output_path} already exists (use --force to overwrite)")
        ctx.exit(1)

    create_example_config(output_path)
    out.success(f"Wrote example configuration to {output_path}")


create_release_commands(cli)


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
