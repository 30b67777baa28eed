#!/usr/bin/env python3
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex, encode_hex

from .config import Config
from .core import output
from .program import ProgramAbort
from .service.executor import LocalExecutor, describe_output
from .service.loader import InputError, build_policy, build_stdin, load_input
from .service.proof_service import ProofService
from .service.proof_store import ProofStorageError, ProofWithPublicValues
from .service.proving_client import ProvingClient, ProvingServiceError

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _print_public_values(public_values: bytes) -> None:
    for name, value in describe_output(output.decode(public_values)).items():
        print(f"{name}: {value}")


async def _prove(stdin: dict, expected: bytes, proof_out: Path, client: ProvingClient) -> ProofWithPublicValues:
    proof = await client.prove(stdin)
    if proof.public_values != expected:
        raise ProvingServiceError("Proof public values do not match local execution")
    proof.save(proof_out)
    print("Successfully generated proof!")

    vkey = Config.VERIFICATION_KEY or proof.vkey or await client.get_vkey()
    result = await client.verify(proof, vkey)
    if not result["verified"]:
        raise ProvingServiceError(f"verification failed: {result['error']}")
    print("Successfully verified proof!")
    print(f"vkey: {vkey}")
    return proof


async def _execute_remote(stdin: dict, client: ProvingClient) -> bytes:
    result = await client.execute(stdin)
    try:
        public_values = decode_hex(result["public_values"])
        output.decode(public_values)
    except (ValueError, DecodingError) as e:
        raise ProvingServiceError(f"Proving-service returned malformed public values: {e}") from e
    print(f"Number of cycles: {result.get('cycles', 'unknown')}")
    return public_values


@click.command()
@click.option("--execute", "execute", is_flag=True, help="Run the program without proving")
@click.option("--prove", "prove", is_flag=True, help="Generate and verify a proof")
@click.option("--remote", is_flag=True, help="With --execute, run on the proving service instead of in-process")
@click.option(
    "--input",
    "input_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Attestation JSON document (default: INPUT_PATH)",
)
@click.option("--threshold-age", type=int, default=None, help="Minimum age in seconds")
@click.option("--current-timestamp", type=int, default=None, help="Reference time (default: now)")
@click.option("--proof-out", type=click.Path(path_type=Path), default=None, help="Where to save the proof")
@click.option("--verbose", is_flag=True)
def main(
    execute: bool,
    prove: bool,
    remote: bool,
    input_path: Optional[Path],
    threshold_age: Optional[int],
    current_timestamp: Optional[int],
    proof_out: Optional[Path],
    verbose: bool,
):
    _setup_logging(verbose)

    if execute == prove:
        click.echo("Error: You must specify either --execute or --prove", err=True)
        sys.exit(1)

    try:
        loaded = load_input(input_path)
        policy_input = build_policy(threshold_age, current_timestamp)
    except InputError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    stdin = build_stdin(loaded, policy_input)

    try:
        if execute and remote:
            public_values = asyncio.run(_execute_remote(stdin, ProvingClient()))
            print("Program executed successfully.")
            _print_public_values(public_values)
        elif execute:
            report = LocalExecutor().execute(stdin)
            print("Program executed successfully.")
            _print_public_values(report.public_values)
        else:
            # A failing claim is rejected before any proving work
            report = LocalExecutor().execute(stdin)
            proof = asyncio.run(
                _prove(stdin, report.public_values, proof_out or Path(Config.PROOF_PATH), ProvingClient())
            )
            print(f"public_values: {encode_hex(proof.public_values)}")
            _print_public_values(proof.public_values)
    except ProgramAbort as e:
        click.echo(f"Verification failed: {e}", err=True)
        sys.exit(2)
    except (ProvingServiceError, ProofStorageError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("proof_path", type=click.Path(path_type=Path))
@click.option("--vkey", type=str, default=None, help="Program verification key (hex)")
def verify(proof_path: Path, vkey: Optional[str]):
    """Verify a saved proof through the proving service."""
    _setup_logging(False)

    try:
        proof = ProofWithPublicValues.load(proof_path)
    except ProofStorageError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    result = asyncio.run(ProofService().verify_proof(proof, vkey=vkey))
    if not result["verified"]:
        click.echo(f"Proof rejected: {result['error']}", err=True)
        sys.exit(1)

    print("Proof verified.")
    _print_public_values(proof.public_values)


if __name__ == "__main__":
    main()
