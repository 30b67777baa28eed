"""
EIP-712 typed-data hashing for EAS ``Attest`` messages.

digest = keccak256(0x19 0x01 || domainSeparator || hashStruct(message))
"""

import logging

from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from .constants import (
    ATTEST_TYPEHASH,
    EIP191_STRUCTURED_PREFIX,
    EIP712_DOMAIN_TYPEHASH,
    STRUCT_FIELD_TYPES,
)
from .types import AttestationRecord, DomainParameters

logger = logging.getLogger(__name__)


def struct_hash(record: AttestationRecord) -> bytes:
    encoded = encode(
        STRUCT_FIELD_TYPES,
        [
            ATTEST_TYPEHASH,
            record.version,
            bytes(record.schema),
            to_checksum_address(bytes(record.recipient)),
            record.time,
            record.expiration_time,
            record.revocable,
            bytes(record.ref_uid),
            keccak(bytes(record.data)),
            bytes(record.salt),
        ],
    )
    return keccak(encoded)


def digest(domain_separator: bytes, record: AttestationRecord) -> bytes:
    if len(domain_separator) != 32:
        raise ValueError("domain separator must be 32 bytes")
    result = keccak(EIP191_STRUCTURED_PREFIX + bytes(domain_separator) + struct_hash(record))
    logger.debug(f"Computed attestation digest 0x{result.hex()}")
    return result


def domain_separator(params: DomainParameters) -> bytes:
    """Hash the EIP712Domain(name, version, chainId, verifyingContract) struct."""
    encoded = encode(
        ["bytes32", "bytes32", "bytes32", "uint256", "address"],
        [
            EIP712_DOMAIN_TYPEHASH,
            keccak(text=params.name),
            keccak(text=params.version),
            params.chain_id,
            to_checksum_address(bytes(params.verifying_contract)),
        ],
    )
    return keccak(encoded)
