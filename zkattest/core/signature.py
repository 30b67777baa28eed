import logging

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError

from .errors import InvalidSignature
from .types import Signature

logger = logging.getLogger(__name__)


def _recovery_id(v: int) -> int:
    if v in (0, 1):
        return v
    if v in (27, 28):
        return v - 27
    if v >= 35:
        return (v - 35) % 2
    raise InvalidSignature(f"invalid recovery id: {v}")


def recover(digest: bytes, signature: Signature) -> bytes:
    """Recover the 20-byte signer address from a secp256k1 signature over ``digest``."""
    try:
        sig = keys.Signature(vrs=(_recovery_id(signature.v), signature.r, signature.s))
        public_key = sig.recover_public_key_from_msg_hash(bytes(digest))
    except (BadSignature, ValidationError) as e:
        raise InvalidSignature(f"signature recovery failed: {e}") from e
    address = public_key.to_canonical_address()
    logger.debug(f"Recovered signer 0x{address.hex()}")
    return address


def verify(claimed: bytes, recovered: bytes) -> bool:
    return bytes(claimed) == bytes(recovered)
