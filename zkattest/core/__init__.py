from .errors import (
    AgeBelowThreshold,
    DecodeError,
    FailureKind,
    InvalidSignature,
    InvalidTimestamps,
    VerificationError,
)
from .types import (
    AttestationRecord,
    DomainParameters,
    PolicyInput,
    PublicOutput,
    Signature,
    SignedClaim,
)
from .verifier import CoreVerifier, VerificationResult, VerifierState, verify_claim

__all__ = [
    "AgeBelowThreshold",
    "AttestationRecord",
    "CoreVerifier",
    "DecodeError",
    "DomainParameters",
    "FailureKind",
    "InvalidSignature",
    "InvalidTimestamps",
    "PolicyInput",
    "PublicOutput",
    "Signature",
    "SignedClaim",
    "VerificationError",
    "VerificationResult",
    "VerifierState",
    "verify_claim",
]
