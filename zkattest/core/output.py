from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import to_canonical_address, to_checksum_address

from .types import PublicOutput

# (address signer, uint64 threshold_age, uint64 current_timestamp,
#  uint64 attest_time, address recipient, bytes32 domain_separator)
PUBLIC_OUTPUT_ABI = ["address", "uint64", "uint64", "uint64", "address", "bytes32"]


def encode(output: PublicOutput) -> bytes:
    return abi_encode(
        PUBLIC_OUTPUT_ABI,
        [
            to_checksum_address(bytes(output.signer)),
            output.threshold_age,
            output.current_timestamp,
            output.attest_time,
            to_checksum_address(bytes(output.recipient)),
            bytes(output.domain_separator),
        ],
    )


def decode(public_values: bytes) -> PublicOutput:
    signer, threshold_age, current_timestamp, attest_time, recipient, separator = abi_decode(
        PUBLIC_OUTPUT_ABI, bytes(public_values)
    )
    return PublicOutput(
        signer=to_canonical_address(signer),
        threshold_age=threshold_age,
        current_timestamp=current_timestamp,
        attest_time=attest_time,
        recipient=to_canonical_address(recipient),
        domain_separator=separator,
    )
