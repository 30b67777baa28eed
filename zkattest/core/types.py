from dataclasses import dataclass

from .constants import ADDRESS_LENGTH, UINT16_MAX, UINT64_MAX, UINT256_MAX, WORD_LENGTH


def _check_bytes(name: str, value: bytes, length: int) -> None:
    if not isinstance(value, (bytes, bytearray)) or len(value) != length:
        raise ValueError(f"{name} must be {length} bytes")


def _check_uint(name: str, value: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise ValueError(f"{name} out of range: {value!r}")


@dataclass(frozen=True)
class AttestationRecord:
    version: int
    schema: bytes
    recipient: bytes
    time: int
    expiration_time: int
    revocable: bool
    ref_uid: bytes
    data: bytes
    salt: bytes

    def __post_init__(self):
        _check_uint("version", self.version, UINT16_MAX)
        _check_bytes("schema", self.schema, WORD_LENGTH)
        _check_bytes("recipient", self.recipient, ADDRESS_LENGTH)
        _check_uint("time", self.time, UINT64_MAX)
        _check_uint("expiration_time", self.expiration_time, UINT64_MAX)
        if not isinstance(self.revocable, bool):
            raise ValueError("revocable must be a bool")
        _check_bytes("ref_uid", self.ref_uid, WORD_LENGTH)
        if not isinstance(self.data, (bytes, bytearray)):
            raise ValueError("data must be bytes")
        _check_bytes("salt", self.salt, WORD_LENGTH)


@dataclass(frozen=True)
class DomainParameters:
    name: str
    version: str
    chain_id: int
    verifying_contract: bytes

    def __post_init__(self):
        _check_uint("chain_id", self.chain_id, UINT256_MAX)
        _check_bytes("verifying_contract", self.verifying_contract, ADDRESS_LENGTH)


@dataclass(frozen=True)
class Signature:
    """ECDSA signature scalars plus the recovery indicator as supplied (0/1, 27/28 or EIP-155)."""

    r: int
    s: int
    v: int

    def __post_init__(self):
        _check_uint("r", self.r, UINT256_MAX)
        _check_uint("s", self.s, UINT256_MAX)
        if isinstance(self.v, bool) or not isinstance(self.v, int) or self.v < 0:
            raise ValueError(f"v out of range: {self.v!r}")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Signature":
        """Parse the 65-byte r || s || v form."""
        if len(raw) != 65:
            raise ValueError("signature must be 65 bytes")
        return cls(
            r=int.from_bytes(raw[:32], "big"),
            s=int.from_bytes(raw[32:64], "big"),
            v=raw[64],
        )


@dataclass(frozen=True)
class SignedClaim:
    record: AttestationRecord
    domain_separator: bytes
    signer: bytes
    signature: Signature

    def __post_init__(self):
        _check_bytes("domain_separator", self.domain_separator, WORD_LENGTH)
        _check_bytes("signer", self.signer, ADDRESS_LENGTH)


@dataclass(frozen=True)
class PolicyInput:
    threshold_age: int
    current_timestamp: int

    def __post_init__(self):
        _check_uint("threshold_age", self.threshold_age, UINT64_MAX)
        _check_uint("current_timestamp", self.current_timestamp, UINT64_MAX)


@dataclass(frozen=True)
class PublicOutput:
    signer: bytes
    threshold_age: int
    current_timestamp: int
    attest_time: int
    recipient: bytes
    domain_separator: bytes

    def __post_init__(self):
        _check_bytes("signer", self.signer, ADDRESS_LENGTH)
        _check_uint("threshold_age", self.threshold_age, UINT64_MAX)
        _check_uint("current_timestamp", self.current_timestamp, UINT64_MAX)
        _check_uint("attest_time", self.attest_time, UINT64_MAX)
        _check_bytes("recipient", self.recipient, ADDRESS_LENGTH)
        _check_bytes("domain_separator", self.domain_separator, WORD_LENGTH)
