from .request import AttestationDocument, ExecuteRequest, ProofGenerationRequest, VerifyRequest
from .response import (
    ExecutionResponse,
    HealthResponse,
    ProofGenerationResponse,
    PublicOutputModel,
    VerificationResponse,
)

__all__ = [
    "AttestationDocument",
    "ExecuteRequest",
    "ProofGenerationRequest",
    "VerifyRequest",
    "ExecutionResponse",
    "HealthResponse",
    "ProofGenerationResponse",
    "PublicOutputModel",
    "VerificationResponse",
]
