import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from eth_utils import decode_hex
from pydantic import ValidationError

from ..config import Config
from ..core import AttestationRecord, DomainParameters, PolicyInput, Signature, SignedClaim
from ..core.hasher import domain_separator
from ..models.request import AttestationDocument
from ..program import write_stdin

logger = logging.getLogger(__name__)


class InputError(ValueError):
    pass


@dataclass(frozen=True)
class LoadedInput:
    claim: SignedClaim
    domain: DomainParameters


def from_document(document: AttestationDocument) -> LoadedInput:
    domain_model = document.sig.domain
    message = document.sig.message
    sig = document.sig.signature

    try:
        domain = DomainParameters(
            name=domain_model.name,
            version=domain_model.version,
            chain_id=domain_model.chain_id,
            verifying_contract=decode_hex(domain_model.verifying_contract),
        )
        record = AttestationRecord(
            version=message.version,
            schema=decode_hex(message.schema_uid),
            recipient=decode_hex(message.recipient),
            time=message.time,
            expiration_time=message.expiration_time,
            revocable=message.revocable,
            ref_uid=decode_hex(message.ref_uid),
            data=decode_hex(message.data),
            salt=decode_hex(message.salt),
        )
        claim = SignedClaim(
            record=record,
            domain_separator=domain_separator(domain),
            signer=decode_hex(document.signer),
            signature=Signature(r=int(sig.r, 16), s=int(sig.s, 16), v=sig.v),
        )
    except ValueError as e:
        raise InputError(f"Invalid attestation input: {e}") from e

    logger.debug(f"Domain separator: 0x{claim.domain_separator.hex()}")
    return LoadedInput(claim=claim, domain=domain)


def parse_input(data: Mapping[str, Any]) -> LoadedInput:
    try:
        document = AttestationDocument.model_validate(data)
    except ValidationError as e:
        raise InputError(f"Invalid attestation input: {e}") from e
    return from_document(document)


def load_input(path: Union[str, Path, None] = None) -> LoadedInput:
    input_path = Path(path or Config.INPUT_PATH)
    if not input_path.exists():
        raise InputError(f"Input file not found: {input_path}")

    try:
        with open(input_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InputError(f"Input file is not valid JSON: {e}") from e

    logger.info(f"Loaded attestation input from {input_path}")
    return parse_input(data)


def build_policy(threshold_age: Optional[int] = None, current_timestamp: Optional[int] = None) -> PolicyInput:
    if threshold_age is None:
        threshold_age = Config.THRESHOLD_AGE
    if current_timestamp is None:
        current_timestamp = int(time.time())
    try:
        return PolicyInput(threshold_age=threshold_age, current_timestamp=current_timestamp)
    except ValueError as e:
        raise InputError(str(e)) from e


def build_stdin(loaded: LoadedInput, policy_input: PolicyInput) -> Dict[str, Any]:
    return write_stdin(loaded.claim, policy_input)
