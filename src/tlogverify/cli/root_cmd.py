"""tlogverify root: inspect the trusted root."""

from pathlib import Path

import click
import yaml

from tlogverify.cli.main import cli


@cli.group()
def root() -> None:
    """Trusted root commands."""


@root.command()
@click.option("--trusted-root", "trusted_root_path", default=None, type=click.Path(path_type=Path),
              help="Trusted root file (default: from config)")
def show(trusted_root_path: Path | None) -> None:
    """List the trusted logs and their key ids."""
    from tlogverify.config import load_config
    from tlogverify.errors import ParseError
    from tlogverify.root.loader import load_trusted_root

    try:
        path = trusted_root_path or load_config().trusted_root
        trusted_root = load_trusted_root(path)
    except (FileNotFoundError, ParseError, yaml.YAMLError, ValueError, TypeError) as e:
        click.echo(f"Error: {e}")
        raise SystemExit(1)

    if not trusted_root.tlogs:
        click.echo("No transparency logs configured.")
        return

    for tlog in trusted_root.tlogs:
        click.echo(f"  {tlog.key_id}  {tlog.base_url}")
