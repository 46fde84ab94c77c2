"""tlogverify verify: check a bundle's transparency log evidence."""

from pathlib import Path

import click
import yaml

from tlogverify.cli.main import cli


@cli.command()
@click.argument("bundle_path", type=click.Path(path_type=Path))
@click.option("--trusted-root", "trusted_root_path", default=None, type=click.Path(path_type=Path),
              help="Trusted root file (default: from config)")
@click.option("--threshold", default=None, type=click.IntRange(min=0),
              help="Minimum number of log entries required")
@click.option("--online/--offline", default=None, help="Re-query the logs instead of checking SETs")
@click.option("--timeout", default=None, type=click.FloatRange(min=0, min_open=True),
              help="Per-request timeout in seconds (online)")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...)")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path),
              help="Config file (default: ~/.tlogverify/config.yaml)")
def verify(
    bundle_path: Path,
    trusted_root_path: Path | None,
    threshold: int | None,
    online: bool | None,
    timeout: float | None,
    log_level: str | None,
    config_path: Path | None,
) -> None:
    """Verify BUNDLE_PATH against the trusted transparency logs."""
    from tlogverify.config import load_config
    from tlogverify.entity.bundle import load_bundle
    from tlogverify.errors import ParseError
    from tlogverify.logging_config import configure_logging
    from tlogverify.root.loader import load_trusted_root
    from tlogverify.verifier.models import VerificationMode
    from tlogverify.verifier.tlog import TransparencyLogVerifier

    try:
        settings = load_config(config_path)
        configure_logging(log_level or settings.log_level)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        click.echo(f"Error: {e}")
        raise SystemExit(1)

    try:
        trusted_root = load_trusted_root(trusted_root_path or settings.trusted_root)
        bundle = load_bundle(bundle_path)
    except (FileNotFoundError, ParseError) as e:
        click.echo(f"Error: {e}")
        raise SystemExit(1)

    online = settings.online if online is None else online
    verifier = TransparencyLogVerifier(
        trusted_root,
        threshold=settings.threshold if threshold is None else threshold,
        mode=VerificationMode.ONLINE if online else VerificationMode.OFFLINE,
    )
    result = verifier.check(bundle, timeout=settings.timeout if timeout is None else timeout)

    if result.valid:
        click.echo(f"Verified: {result.entries_checked} transparency log entries.")
        return

    kind = result.error_kind.value if result.error_kind else "parse_error"
    where = f" entry {result.entry_index}" if result.entry_index is not None else ""
    click.echo(f"VERIFICATION FAILED [{kind}]{where}: {result.first_error}")
    raise SystemExit(1)
