from enum import Enum


class FailureKind(str, Enum):
    INVALID_SIGNATURE = "InvalidSignature"
    DECODE_ERROR = "DecodeError"
    INVALID_TIMESTAMPS = "InvalidTimestamps"
    AGE_BELOW_THRESHOLD = "AgeBelowThreshold"


class VerificationError(Exception):
    """Base class for failures that abort a verification run."""

    kind: FailureKind

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)


class InvalidSignature(VerificationError):
    kind = FailureKind.INVALID_SIGNATURE


class DecodeError(VerificationError):
    kind = FailureKind.DECODE_ERROR


class InvalidTimestamps(VerificationError):
    kind = FailureKind.INVALID_TIMESTAMPS


class AgeBelowThreshold(VerificationError):
    kind = FailureKind.AGE_BELOW_THRESHOLD
