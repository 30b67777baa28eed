#!/usr/bin/env python3
"""
Compute the EIP-712 domain separator and attestation digest for an input file.

Useful to compare against what a wallet or the EAS SDK signed when a proof run
fails with InvalidSignature.

Usage:
    python3 compute-domain-separator.py [input.json]

If no file is provided, defaults to ./input.json
"""

import sys
from pathlib import Path

from eth_utils import encode_hex, to_checksum_address

from zkattest.core import signature
from zkattest.core.errors import InvalidSignature
from zkattest.core.hasher import digest
from zkattest.service.loader import InputError, load_input


def main():
    input_file = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("input.json")

    try:
        loaded = load_input(input_file)
    except InputError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    claim = loaded.claim
    calculated = digest(claim.domain_separator, claim.record)
    print(f"domain_separator: {encode_hex(claim.domain_separator)}")
    print(f"digest: {encode_hex(calculated)}")
    print(f"claimed signer: {to_checksum_address(claim.signer)}")

    try:
        recovered = signature.recover(calculated, claim.signature)
    except InvalidSignature as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"recovered signer: {to_checksum_address(recovered)}")
    return 0 if signature.verify(claim.signer, recovered) else 1


if __name__ == "__main__":
    sys.exit(main())
