"""
zkattest Test Configuration
===========================

Shared fixtures: deterministic secp256k1 keys, an EAS attestation record whose
payload carries a date of birth, and the matching signed claim / JSON document.

Usage:
    pytest tests/unit/
"""

import dataclasses
from typing import Any, Dict

import pytest
from eth_keys import keys
from eth_utils import encode_hex, to_checksum_address

from zkattest.core import (
    AttestationRecord,
    DomainParameters,
    PolicyInput,
    Signature,
    SignedClaim,
)
from zkattest.core.hasher import digest, domain_separator
from zkattest.core.payload import encode_birth_timestamp

SIGNER_KEY = bytes.fromhex("11" * 32)
OTHER_KEY = bytes.fromhex("22" * 32)

ATTEST_TIME = 1700000000
BIRTH_TIMESTAMP = 950000000
THRESHOLD_AGE = 568036800  # 18 years of 365.25 days
CURRENT_TIMESTAMP = 1700000000


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "/unit/" in str(item.path):
            item.add_marker(pytest.mark.unit)


def address_of(private_key: bytes) -> bytes:
    return keys.PrivateKey(private_key).public_key.to_canonical_address()


def sign_record(record: AttestationRecord, separator: bytes, private_key: bytes) -> Signature:
    sig = keys.PrivateKey(private_key).sign_msg_hash(digest(separator, record))
    return Signature(r=sig.r, s=sig.s, v=sig.v + 27)


def make_document(claim: SignedClaim, domain: DomainParameters) -> Dict[str, Any]:
    record = claim.record
    return {
        "signer": to_checksum_address(claim.signer),
        "sig": {
            "domain": {
                "name": domain.name,
                "version": domain.version,
                "chainId": str(domain.chain_id),
                "verifyingContract": to_checksum_address(domain.verifying_contract),
            },
            "primaryType": "Attest",
            "message": {
                "version": record.version,
                "schema": encode_hex(record.schema),
                "recipient": to_checksum_address(record.recipient),
                "time": str(record.time),
                "expirationTime": str(record.expiration_time),
                "revocable": record.revocable,
                "refUID": encode_hex(record.ref_uid),
                "data": encode_hex(record.data),
                "salt": encode_hex(record.salt),
            },
            "signature": {
                "r": hex(claim.signature.r),
                "s": hex(claim.signature.s),
                "v": claim.signature.v,
            },
            "uid": "0x" + "ab" * 32,
        },
    }


def typed_data(domain, record) -> Dict[str, Any]:
    """EIP-712 document for eth_account's reference encoder."""
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"},
            ],
            "Attest": [
                {"name": "version", "type": "uint16"},
                {"name": "schema", "type": "bytes32"},
                {"name": "recipient", "type": "address"},
                {"name": "time", "type": "uint64"},
                {"name": "expirationTime", "type": "uint64"},
                {"name": "revocable", "type": "bool"},
                {"name": "refUID", "type": "bytes32"},
                {"name": "data", "type": "bytes"},
                {"name": "salt", "type": "bytes32"},
            ],
        },
        "primaryType": "Attest",
        "domain": {
            "name": domain.name,
            "version": domain.version,
            "chainId": domain.chain_id,
            "verifyingContract": to_checksum_address(domain.verifying_contract),
        },
        "message": {
            "version": record.version,
            "schema": record.schema,
            "recipient": to_checksum_address(record.recipient),
            "time": record.time,
            "expirationTime": record.expiration_time,
            "revocable": record.revocable,
            "refUID": record.ref_uid,
            "data": record.data,
            "salt": record.salt,
        },
    }


@pytest.fixture
def domain() -> DomainParameters:
    return DomainParameters(
        name="EAS Attestation",
        version="0.26",
        chain_id=11155111,
        verifying_contract=bytes.fromhex("c2679fbd37d54388ce493f1db75320d236e1815e"),
    )


@pytest.fixture
def separator(domain) -> bytes:
    return domain_separator(domain)


@pytest.fixture
def record() -> AttestationRecord:
    return AttestationRecord(
        version=1,
        schema=bytes.fromhex("1c12bac4f230477c87449a101f5f9d6ca1c492866355c0a5e27026753e5ebf40"),
        recipient=bytes.fromhex("8f4ea33bd3a1e8eb1a24c1b2b8e8cba0c3a0c2b1"),
        time=ATTEST_TIME,
        expiration_time=0,
        revocable=True,
        ref_uid=b"\x00" * 32,
        data=encode_birth_timestamp(BIRTH_TIMESTAMP),
        salt=bytes.fromhex("42" * 32),
    )


@pytest.fixture
def signer() -> bytes:
    return address_of(SIGNER_KEY)


@pytest.fixture
def claim(record, separator, signer) -> SignedClaim:
    return SignedClaim(
        record=record,
        domain_separator=separator,
        signer=signer,
        signature=sign_record(record, separator, SIGNER_KEY),
    )


@pytest.fixture
def forged_claim(claim) -> SignedClaim:
    """Same record, signed by a key other than the claimed signer."""
    return dataclasses.replace(
        claim, signature=sign_record(claim.record, claim.domain_separator, OTHER_KEY)
    )


@pytest.fixture
def policy_input() -> PolicyInput:
    return PolicyInput(threshold_age=THRESHOLD_AGE, current_timestamp=CURRENT_TIMESTAMP)


@pytest.fixture
def document(claim, domain) -> Dict[str, Any]:
    return make_document(claim, domain)
