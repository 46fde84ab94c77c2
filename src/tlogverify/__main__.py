"""CLI entrypoint for tlogverify."""

import tlogverify.cli.root_cmd  # noqa: F401
import tlogverify.cli.verify_cmd  # noqa: F401
from tlogverify.cli.main import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
