from pydantic import BaseModel, Field
from typing import Optional


class HealthResponse(BaseModel):
    status: str = Field(default="healthy")
    proving_service: str
    ipfs_service: str


class PublicOutputModel(BaseModel):
    signer: str
    threshold_age: int
    current_timestamp: int
    attest_time: int
    recipient: str
    domain_separator: str


class ExecutionResponse(BaseModel):
    status: str = Field(default="success")
    public_values: str
    output: PublicOutputModel


class ProofGenerationResponse(BaseModel):
    status: str = Field(default="success")
    ipfs_cid: Optional[str] = None
    vkey: str
    public_values: str
    output: PublicOutputModel
    verified: bool
    reused: bool = False
    warning: Optional[str] = None


class VerificationResponse(BaseModel):
    verified: bool
    error: str = ""
