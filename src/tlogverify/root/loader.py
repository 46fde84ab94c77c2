"""Load trusted root files (YAML or JSON)."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from tlogverify.errors import ParseError
from tlogverify.root.models import TrustedRoot


def load_trusted_root(path: Path) -> TrustedRoot:
    """Load a trusted root from a YAML or JSON file.

    JSON is a subset of YAML, so both go through ``yaml.safe_load``.
    """
    if not path.exists():
        raise FileNotFoundError(f"Trusted root not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"{path}: not valid YAML/JSON: {e}") from e

    if not data:
        raise ParseError(f"Empty trusted root file: {path}")
    if not isinstance(data, dict):
        raise ParseError(f"{path}: trusted root must be a mapping")

    try:
        return TrustedRoot(**data)
    except (ValidationError, ValueError) as e:
        raise ParseError(f"{path}: invalid trusted root: {e}") from e
