"""
CoreVerifier: the straight-line verification run committed by the proof.

    START -> DIGEST_COMPUTED -> SIGNATURE_CHECKED -> AGE_CHECKED -> COMMITTED
      |             |                   |                 |
      +-------------+-------------------+-----------------+---> FAILED(kind)

Failures are returned, not raised; the host decides whether to abort.
Public values are only produced in the COMMITTED state.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from . import hasher, output, payload, policy, signature
from .errors import AgeBelowThreshold, FailureKind, InvalidSignature, VerificationError
from .types import PolicyInput, PublicOutput, SignedClaim

logger = logging.getLogger(__name__)


class VerifierState(str, Enum):
    START = "Start"
    DIGEST_COMPUTED = "DigestComputed"
    SIGNATURE_CHECKED = "SignatureChecked"
    AGE_CHECKED = "AgeChecked"
    COMMITTED = "Committed"
    FAILED = "Failed"


@dataclass
class VerificationResult:
    state: VerifierState
    failure: Optional[FailureKind] = None
    public_values: Optional[bytes] = None
    public_output: Optional[PublicOutput] = None
    message: str = ""
    trace: List[VerifierState] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.state is VerifierState.COMMITTED


class CoreVerifier:
    def __init__(self, claim: SignedClaim, policy_input: PolicyInput):
        self.claim = claim
        self.policy_input = policy_input
        self.state = VerifierState.START
        self.trace: List[VerifierState] = [VerifierState.START]

    def _advance(self, state: VerifierState) -> None:
        logger.debug(f"Verifier transition {self.state.value} -> {state.value}")
        self.state = state
        self.trace.append(state)

    def run(self) -> VerificationResult:
        if self.state is not VerifierState.START:
            raise RuntimeError("CoreVerifier instances are single-use")
        try:
            public_output = self._run()
        except VerificationError as e:
            self._advance(VerifierState.FAILED)
            logger.info(f"Verification failed: {e.kind.value}")
            return VerificationResult(
                state=self.state,
                failure=e.kind,
                message=str(e),
                trace=list(self.trace),
            )

        public_values = output.encode(public_output)
        self._advance(VerifierState.COMMITTED)
        return VerificationResult(
            state=self.state,
            public_values=public_values,
            public_output=public_output,
            trace=list(self.trace),
        )

    def _run(self) -> PublicOutput:
        claim = self.claim
        record = claim.record

        calculated = hasher.digest(claim.domain_separator, record)
        self._advance(VerifierState.DIGEST_COMPUTED)

        recovered = signature.recover(calculated, claim.signature)
        if not signature.verify(claim.signer, recovered):
            raise InvalidSignature(
                f"recovered 0x{recovered.hex()} does not match signer 0x{bytes(claim.signer).hex()}"
            )
        self._advance(VerifierState.SIGNATURE_CHECKED)

        birth_timestamp = payload.decode_birth_timestamp(record.data)
        age = policy.age_in_seconds(self.policy_input.current_timestamp, birth_timestamp)
        if not policy.meets_threshold(age, self.policy_input.threshold_age):
            raise AgeBelowThreshold("age is below threshold")
        self._advance(VerifierState.AGE_CHECKED)

        return PublicOutput(
            signer=bytes(claim.signer),
            threshold_age=self.policy_input.threshold_age,
            current_timestamp=self.policy_input.current_timestamp,
            attest_time=record.time,
            recipient=bytes(record.recipient),
            domain_separator=bytes(claim.domain_separator),
        )


def verify_claim(claim: SignedClaim, policy_input: PolicyInput) -> VerificationResult:
    return CoreVerifier(claim, policy_input).run()
