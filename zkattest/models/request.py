import re
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_BYTES32_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_HEX_RE = re.compile(r"^0x([0-9a-fA-F]{2})*$")
_SCALAR_RE = re.compile(r"^0x[0-9a-fA-F]{1,64}$")


def _address(value: str) -> str:
    if not _ADDRESS_RE.match(value):
        raise ValueError(f"Invalid address (expected 0x + 40 hex characters): {value}")
    return value


def _bytes32(value: str) -> str:
    if not _BYTES32_RE.match(value):
        raise ValueError(f"Invalid bytes32 (expected 0x + 64 hex characters): {value}")
    return value


def _hex(value: str) -> str:
    if not _HEX_RE.match(value):
        raise ValueError("Expected a 0x-prefixed hex string of whole bytes")
    return value


def _scalar(value: str) -> str:
    if not _SCALAR_RE.match(value):
        raise ValueError(f"Invalid signature scalar: {value}")
    return value


Address = Annotated[str, AfterValidator(_address)]
Bytes32 = Annotated[str, AfterValidator(_bytes32)]
HexBytes = Annotated[str, AfterValidator(_hex)]
Scalar = Annotated[str, AfterValidator(_scalar)]


class DomainModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    version: str
    chain_id: int = Field(..., alias="chainId", ge=0)
    verifying_contract: Address = Field(..., alias="verifyingContract")


class MessageModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: int = Field(..., ge=0, le=2**16 - 1)
    schema_uid: Bytes32 = Field(..., alias="schema")
    recipient: Address
    time: int = Field(..., ge=0, le=2**64 - 1)
    expiration_time: int = Field(..., alias="expirationTime", ge=0, le=2**64 - 1)
    revocable: bool
    ref_uid: Bytes32 = Field(..., alias="refUID")
    data: HexBytes
    salt: Bytes32


class SignatureModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    r: Scalar
    s: Scalar
    v: int = Field(..., ge=0)

    @field_validator("v", mode="before")
    @classmethod
    def _hex_v(cls, value):
        if isinstance(value, str) and value.startswith("0x"):
            return int(value, 16)
        return value


class SigModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    domain: DomainModel
    message: MessageModel
    signature: SignatureModel


class AttestationDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    signer: Address
    sig: SigModel


class ExecuteRequest(BaseModel):
    attestation: AttestationDocument
    threshold_age: Optional[int] = Field(default=None, ge=0, le=2**64 - 1)
    current_timestamp: Optional[int] = Field(default=None, ge=0, le=2**64 - 1)


class ProofGenerationRequest(ExecuteRequest):
    pass


class VerifyRequest(BaseModel):
    proof: str = Field(..., min_length=1)
    public_values: HexBytes
    vkey: Optional[str] = None
