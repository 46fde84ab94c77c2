"""Pydantic models for the trusted root of transparency logs."""

from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes
from pydantic import BaseModel, ConfigDict, model_validator

from tlogverify.tlog.keys import key_id, load_public_key


class TlogVerifier(BaseModel):
    """One trusted log operator: where to query it and which key signs for it."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    public_key: str
    key_id: str = ""

    @model_validator(mode="before")
    @classmethod
    def _derive_key_id(cls, data: dict) -> dict:
        if isinstance(data, dict) and not data.get("key_id") and data.get("public_key"):
            data = dict(data)
            data["key_id"] = key_id(load_public_key(data["public_key"])).hex()
        return data

    def load_key(self) -> PublicKeyTypes:
        return load_public_key(self.public_key)


class TrustedRoot(BaseModel):
    model_config = ConfigDict(frozen=True)

    tlogs: list[TlogVerifier] = []

    def tlog_verifiers(self) -> dict[str, TlogVerifier]:
        """Map each log's hex key id to its verifier."""
        return {tlog.key_id: tlog for tlog in self.tlogs}
