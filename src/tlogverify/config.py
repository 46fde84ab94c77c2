"""Global config loading from ~/.tlogverify/."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

TLOG_DIR = Path.home() / ".tlogverify"
CONFIG_PATH = TLOG_DIR / "config.yaml"
DEFAULT_TRUSTED_ROOT = TLOG_DIR / "trusted_root.yaml"


class VerifierSettings(BaseModel):
    trusted_root: Path = DEFAULT_TRUSTED_ROOT
    threshold: int = Field(default=1, ge=0)
    online: bool = False
    timeout: float = Field(default=10.0, gt=0)
    log_level: str = "WARNING"


def load_config(path: Path | None = None) -> VerifierSettings:
    """Load settings from ~/.tlogverify/config.yaml, or return defaults."""
    path = path or CONFIG_PATH
    if not path.exists():
        return VerifierSettings()

    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return VerifierSettings(**data)
