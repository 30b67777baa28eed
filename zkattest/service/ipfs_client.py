import httpx
import json
import base64
import logging
from typing import Optional

from ..config import Config
from .proof_store import ProofStorageError, ProofWithPublicValues

logger = logging.getLogger(__name__)


class IPFSClient:
    def __init__(self, base_url: str = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url or Config.IPFS_SERVICE_URL
        self.timeout = Config.IPFS_TIMEOUT
        self.transport = transport

    def _client(self, timeout: int = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout or self.timeout, transport=self.transport)

    async def retrieve_proof(self, content_hash: str) -> Optional[ProofWithPublicValues]:
        """Fetch a stored proof by content hash.

        Returns:
            The proof if stored, None otherwise.
        """
        url = f"{self.base_url}/retrieve/{content_hash}"

        logger.info(f"Checking IPFS for proof with content_hash={content_hash[:16]}...")

        async with self._client() as client:
            try:
                response = await client.get(url)
                if response.status_code == 404:
                    logger.info(f"Proof not found in IPFS for content_hash={content_hash[:16]}...")
                    return None
                response.raise_for_status()
                result = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"IPFS-service error: {e.response.status_code} - {e.response.text}")
                raise ProofStorageError(f"IPFS-service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.error(f"Failed to connect to ipfs-service: {e}")
                raise ProofStorageError(f"Failed to connect to ipfs-service: {str(e)}") from e
            except ValueError as e:
                logger.error(f"IPFS-service returned a non-JSON body: {e}")
                raise ProofStorageError(f"IPFS-service returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise ProofStorageError("IPFS-service returned an unexpected response body")

        proof_base64 = result.get("proof")
        if not proof_base64:
            logger.warning(f"IPFS service returned no proof for content_hash={content_hash[:16]}...")
            return None

        try:
            document = json.loads(base64.b64decode(proof_base64))
        except ValueError as e:
            raise ProofStorageError(f"Stored proof is not valid JSON: {e}") from e
        return ProofWithPublicValues.from_dict(document)

    async def store_proof(self, proof: ProofWithPublicValues) -> str:
        url = f"{self.base_url}/store"

        proof_bytes = json.dumps(proof.to_dict()).encode("utf-8")
        proof_base64 = base64.b64encode(proof_bytes).decode("utf-8")
        content_hash = proof.content_hash()

        payload = {"proof": proof_base64, "composite_hash": content_hash}

        logger.info(f"Storing proof on IPFS via ipfs-service: {url}")
        logger.debug(f"Proof size: {len(proof_bytes)} bytes")

        async with self._client() as client:
            try:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                result = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"IPFS-service error: {e.response.status_code} - {e.response.text}")
                raise ProofStorageError(f"IPFS-service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.error(f"Failed to connect to ipfs-service: {e}")
                raise ProofStorageError(f"Failed to connect to ipfs-service: {str(e)}") from e
            except ValueError as e:
                logger.error(f"IPFS-service returned a non-JSON body: {e}")
                raise ProofStorageError(f"IPFS-service returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise ProofStorageError("IPFS-service returned an unexpected response body")

        ipfs_cid = result.get("ipfs_cid")
        if not ipfs_cid:
            raise ProofStorageError("IPFS service did not return CID")

        logger.info(f"Proof stored on IPFS with CID: {ipfs_cid}")
        return ipfs_cid

    async def health_check(self) -> bool:
        url = f"{self.base_url}/health"

        try:
            async with self._client(timeout=5) as client:
                response = await client.get(url)
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"IPFS-service health check failed: {e}")
            return False
