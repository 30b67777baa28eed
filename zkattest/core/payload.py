from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError

from .constants import UINT64_MAX, WORD_LENGTH
from .errors import DecodeError


def decode_birth_timestamp(payload: bytes) -> int:
    """Decode the attestation payload as a single ABI ``uint256`` date of birth.

    The value must fit a uint64 Unix timestamp; anything wider is rejected
    rather than truncated.
    """
    if len(payload) != WORD_LENGTH:
        raise DecodeError(f"expected a single 32-byte word, got {len(payload)} bytes")
    try:
        (value,) = decode(["uint256"], bytes(payload))
    except DecodingError as e:
        raise DecodeError(f"malformed payload: {e}") from e
    if value > UINT64_MAX:
        raise DecodeError("date of birth does not fit in 64 bits")
    return value


def encode_birth_timestamp(timestamp: int) -> bytes:
    return encode(["uint256"], [timestamp])
