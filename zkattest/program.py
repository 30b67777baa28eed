"""
Guest program executed by the proving pipeline.

Reads the prover stdin (a JSON-compatible mapping), runs the CoreVerifier and
returns the bytes to commit. Any failure aborts the run with ProgramAbort so
no public values are committed.
"""

import logging
from typing import Any, Dict, Mapping

from eth_utils import decode_hex, encode_hex, to_checksum_address

from .core import (
    AttestationRecord,
    FailureKind,
    PolicyInput,
    Signature,
    SignedClaim,
    verify_claim,
)

logger = logging.getLogger(__name__)


class ProgramAbort(Exception):
    def __init__(self, kind: FailureKind, message: str = ""):
        self.kind = kind
        super().__init__(f"{kind.value}: {message}" if message else kind.value)


def write_stdin(claim: SignedClaim, policy_input: PolicyInput) -> Dict[str, Any]:
    record = claim.record
    return {
        "signer": to_checksum_address(bytes(claim.signer)),
        "signature": {
            "r": hex(claim.signature.r),
            "s": hex(claim.signature.s),
            "v": claim.signature.v,
        },
        "threshold_age": policy_input.threshold_age,
        "current_timestamp": policy_input.current_timestamp,
        "message": {
            "version": record.version,
            "schema": encode_hex(record.schema),
            "recipient": to_checksum_address(bytes(record.recipient)),
            "time": record.time,
            "expiration_time": record.expiration_time,
            "revocable": record.revocable,
            "ref_uid": encode_hex(record.ref_uid),
            "data": encode_hex(record.data),
            "salt": encode_hex(record.salt),
        },
        "domain_separator": encode_hex(claim.domain_separator),
    }


def read_stdin(stdin: Mapping[str, Any]):
    message = stdin["message"]
    record = AttestationRecord(
        version=int(message["version"]),
        schema=decode_hex(message["schema"]),
        recipient=decode_hex(message["recipient"]),
        time=int(message["time"]),
        expiration_time=int(message["expiration_time"]),
        revocable=bool(message["revocable"]),
        ref_uid=decode_hex(message["ref_uid"]),
        data=decode_hex(message["data"]),
        salt=decode_hex(message["salt"]),
    )
    sig = stdin["signature"]
    claim = SignedClaim(
        record=record,
        domain_separator=decode_hex(stdin["domain_separator"]),
        signer=decode_hex(stdin["signer"]),
        signature=Signature(r=int(sig["r"], 16), s=int(sig["s"], 16), v=int(sig["v"])),
    )
    policy_input = PolicyInput(
        threshold_age=int(stdin["threshold_age"]),
        current_timestamp=int(stdin["current_timestamp"]),
    )
    return claim, policy_input


def run(stdin: Mapping[str, Any]) -> bytes:
    claim, policy_input = read_stdin(stdin)
    logger.debug(f"Domain separator: 0x{claim.domain_separator.hex()}")

    result = verify_claim(claim, policy_input)
    if not result.committed:
        raise ProgramAbort(result.failure, result.message)
    return result.public_values
