import base64
import hashlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from eth_utils import decode_hex, encode_hex

logger = logging.getLogger(__name__)


class ProofStorageError(Exception):
    pass


def content_hash(public_values: bytes) -> str:
    """SHA256 over the committed public values, used as the storage key."""
    return hashlib.sha256(public_values).hexdigest()


@dataclass
class ProofWithPublicValues:
    proof: bytes
    public_values: bytes
    vkey: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proof": base64.b64encode(self.proof).decode("utf-8"),
            "public_values": encode_hex(self.public_values),
            "vkey": self.vkey,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProofWithPublicValues":
        try:
            return cls(
                proof=base64.b64decode(data["proof"], validate=True),
                public_values=decode_hex(data["public_values"]),
                vkey=data.get("vkey", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ProofStorageError(f"Malformed proof document: {e}") from e

    def content_hash(self) -> str:
        return content_hash(self.public_values)

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f)
        logger.info(f"Saved proof to {path}")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ProofWithPublicValues":
        path = Path(path)
        if not path.exists():
            raise ProofStorageError(f"Proof file not found: {path}")
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ProofStorageError(f"Proof file is not valid JSON: {e}") from e
        return cls.from_dict(data)
