"""Click CLI group for tlogverify."""

import click


@click.group()
@click.version_option(package_name="tlogverify")
def cli() -> None:
    """tlogverify: check that signed artifacts carry valid transparency log evidence."""
