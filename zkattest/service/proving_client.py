import httpx
import logging
from typing import Any, Dict, Mapping, Optional

from ..config import Config
from .proof_store import ProofStorageError, ProofWithPublicValues

logger = logging.getLogger(__name__)


class ProvingServiceError(Exception):
    pass


class ProvingClient:
    def __init__(self, base_url: str = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url or Config.PROVING_SERVICE_URL
        self.timeout = Config.PROVING_TIMEOUT
        self.transport = transport

    def _client(self, timeout: int = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout or self.timeout, transport=self.transport)

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.info(f"Calling proving-service: {method} {url}")

        async with self._client() as client:
            try:
                response = await client.request(method, url, json=payload)
                response.raise_for_status()
                result = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"Proving-service error: {e.response.status_code} - {e.response.text}")
                raise ProvingServiceError(f"Proving-service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.error(f"Failed to connect to proving-service: {e}")
                raise ProvingServiceError(f"Failed to connect to proving-service: {str(e)}") from e
            except ValueError as e:
                logger.error(f"Proving-service returned a non-JSON body: {e}")
                raise ProvingServiceError(f"Proving-service returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise ProvingServiceError("Proving-service returned an unexpected response body")
        return result

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", path, payload)

    async def execute(self, stdin: Mapping[str, Any]) -> Dict[str, Any]:
        result = await self._post("/execute", {"stdin": dict(stdin)})
        if not isinstance(result.get("public_values"), str):
            raise ProvingServiceError("Proving-service did not return public values")
        logger.info(f"Remote execution finished in {result.get('cycles', 'unknown')} cycles")
        return result

    async def prove(self, stdin: Mapping[str, Any]) -> ProofWithPublicValues:
        result = await self._post("/prove", {"stdin": dict(stdin)})
        try:
            proof = ProofWithPublicValues.from_dict(result)
        except ProofStorageError as e:
            raise ProvingServiceError(f"Proving-service returned a malformed proof: {e}") from e
        logger.info(f"Received proof from proving-service ({len(proof.proof)} bytes)")
        return proof

    async def verify(self, proof: ProofWithPublicValues, vkey: str) -> Dict[str, Any]:
        payload = proof.to_dict()
        payload["vkey"] = vkey
        result = await self._post("/verify", payload)
        return {
            "verified": result.get("verified") is True,
            "error": str(result.get("error") or ""),
        }

    async def get_vkey(self) -> str:
        vkey = (await self._request("GET", "/vkey")).get("vkey")
        if not vkey or not isinstance(vkey, str):
            raise ProvingServiceError("Proving-service did not return a verification key")
        return vkey

    async def health_check(self) -> bool:
        url = f"{self.base_url}/health"

        try:
            async with self._client(timeout=5) as client:
                response = await client.get(url)
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"Proving-service health check failed: {e}")
            return False
