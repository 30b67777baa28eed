import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from eth_utils import encode_hex

from ..config import Config
from ..core import PolicyInput
from ..models.request import AttestationDocument
from .executor import ExecutionReport, LocalExecutor, describe_output
from .ipfs_client import IPFSClient
from .loader import LoadedInput, build_policy, build_stdin, from_document, parse_input
from .proof_store import ProofStorageError, ProofWithPublicValues, content_hash
from .proving_client import ProvingClient, ProvingServiceError

logger = logging.getLogger(__name__)

Document = Union[AttestationDocument, Mapping[str, Any]]


class ProofService:
    def __init__(
        self,
        proving_client: Optional[ProvingClient] = None,
        ipfs_client: Optional[IPFSClient] = None,
        executor: Optional[LocalExecutor] = None,
    ):
        self.proving_client = proving_client or ProvingClient()
        self.ipfs_client = ipfs_client or IPFSClient()
        self.executor = executor or LocalExecutor()

    def prepare(
        self,
        document: Document,
        threshold_age: Optional[int] = None,
        current_timestamp: Optional[int] = None,
    ) -> Tuple[LoadedInput, PolicyInput, Dict[str, Any]]:
        if isinstance(document, AttestationDocument):
            loaded = from_document(document)
        else:
            loaded = parse_input(document)
        policy_input = build_policy(threshold_age, current_timestamp)
        return loaded, policy_input, build_stdin(loaded, policy_input)

    def execute(
        self,
        document: Document,
        threshold_age: Optional[int] = None,
        current_timestamp: Optional[int] = None,
    ) -> ExecutionReport:
        _, policy_input, stdin = self.prepare(document, threshold_age, current_timestamp)
        logger.info(
            f"Executing attestation check: threshold_age={policy_input.threshold_age}, "
            f"current_timestamp={policy_input.current_timestamp}"
        )
        return self.executor.execute(stdin)

    async def _find_stored_proof(self, public_values: bytes) -> Optional[ProofWithPublicValues]:
        try:
            stored = await self.ipfs_client.retrieve_proof(content_hash(public_values))
        except ProofStorageError as e:
            logger.warning(f"Could not look up stored proof: {e}")
            return None
        if stored is None or stored.public_values != public_values:
            return None
        return stored

    async def _verify_with_program_key(self, proof: ProofWithPublicValues, trust_proof_vkey: bool) -> str:
        vkey = Config.VERIFICATION_KEY or (proof.vkey if trust_proof_vkey else "") or await self.proving_client.get_vkey()
        verification = await self.proving_client.verify(proof, vkey)
        if not verification["verified"]:
            raise ProvingServiceError(f"Proof verification failed: {verification['error']}")
        return vkey

    async def generate_and_store_proof(
        self,
        document: Document,
        threshold_age: Optional[int] = None,
        current_timestamp: Optional[int] = None,
    ) -> Dict[str, Any]:
        _, policy_input, stdin = self.prepare(document, threshold_age, current_timestamp)

        # Dry run first: a failing claim never reaches the prover
        report = self.executor.execute(stdin)
        logger.info("Local execution committed")

        proof = None
        vkey = None
        stored = await self._find_stored_proof(report.public_values)
        if stored is not None:
            try:
                vkey = await self._verify_with_program_key(stored, trust_proof_vkey=False)
                proof = stored
                logger.info("Reusing stored proof for identical public values")
            except ProvingServiceError as e:
                logger.warning(f"Stored proof rejected, proving again: {e}")

        if proof is None:
            logger.info("Calling proving-service")
            proof = await self.proving_client.prove(stdin)
            if proof.public_values != report.public_values:
                raise ProvingServiceError("Proof public values do not match local execution")
            vkey = await self._verify_with_program_key(proof, trust_proof_vkey=True)
        logger.info("Successfully verified proof")

        ipfs_cid = None
        warning = None
        try:
            # The ipfs-service deduplicates by content hash, so a reused proof gets its existing CID
            ipfs_cid = await self.ipfs_client.store_proof(proof)
        except ProofStorageError as e:
            logger.warning(f"Proof generated but not stored: {e}")
            warning = f"Proof not stored: {e}"

        return {
            "ipfs_cid": ipfs_cid,
            "vkey": vkey,
            "public_values": encode_hex(proof.public_values),
            "output": describe_output(report.decoded),
            "verified": True,
            "reused": proof is stored,
            "warning": warning,
        }

    async def verify_proof(self, proof: ProofWithPublicValues, vkey: Optional[str] = None) -> Dict[str, Any]:
        """Check a serialized proof against the program verification key.

        The key embedded in the proof document is never trusted.
        """
        try:
            vkey = vkey or Config.VERIFICATION_KEY or await self.proving_client.get_vkey()
            return await self.proving_client.verify(proof, vkey)
        except ProvingServiceError as e:
            return {"verified": False, "error": str(e)}
