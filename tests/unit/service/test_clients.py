"""
HTTP collaborator tests for zkattest/service/proving_client.py and ipfs_client.py.
"""

import base64
import json

import httpx
import pytest

from zkattest.service.ipfs_client import IPFSClient
from zkattest.service.proof_service import ProofService
from zkattest.service.proof_store import ProofStorageError, ProofWithPublicValues
from zkattest.service.proving_client import ProvingClient, ProvingServiceError

BASE_URL = "http://prover.test"
VKEY = "0x" + "cd" * 32


@pytest.fixture
def proof():
    return ProofWithPublicValues(proof=b"proof", public_values=b"\x01" * 192, vkey=VKEY)


def _transport(routes):
    def handler(request: httpx.Request) -> httpx.Response:
        key = (request.method, request.url.path)
        if key not in routes:
            return httpx.Response(404, json={"error": "Not found"})
        status, body = routes[key](request)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def _raw_transport(status, text):
    return httpx.MockTransport(lambda request: httpx.Response(status, text=text))


class TestProvingClient:
    """Test the remote proving pipeline client."""

    @pytest.mark.asyncio
    async def test_prove(self, proof):
        seen = {}

        def prove(request):
            seen.update(json.loads(request.content))
            return 200, proof.to_dict()

        client = ProvingClient(BASE_URL, transport=_transport({("POST", "/prove"): prove}))
        result = await client.prove({"threshold_age": 1})

        assert result == proof
        assert seen == {"stdin": {"threshold_age": 1}}

    @pytest.mark.asyncio
    async def test_prove_malformed_response(self):
        client = ProvingClient(
            BASE_URL, transport=_transport({("POST", "/prove"): lambda r: (200, {"proof": "x"})})
        )
        with pytest.raises(ProvingServiceError):
            await client.prove({})

    @pytest.mark.asyncio
    async def test_execute(self):
        client = ProvingClient(
            BASE_URL,
            transport=_transport(
                {("POST", "/execute"): lambda r: (200, {"public_values": "0x", "cycles": 42})}
            ),
        )
        assert (await client.execute({}))["cycles"] == 42

    @pytest.mark.asyncio
    async def test_verify(self, proof):
        seen = {}

        def verify(request):
            seen.update(json.loads(request.content))
            return 200, {"verified": True, "error": ""}

        client = ProvingClient(BASE_URL, transport=_transport({("POST", "/verify"): verify}))
        result = await client.verify(proof, VKEY)

        assert result == {"verified": True, "error": ""}
        assert seen["vkey"] == VKEY
        assert seen["public_values"] == "0x" + "01" * 192

    @pytest.mark.asyncio
    async def test_http_error(self, proof):
        client = ProvingClient(
            BASE_URL, transport=_transport({("POST", "/verify"): lambda r: (500, {"error": "boom"})})
        )
        with pytest.raises(ProvingServiceError):
            await client.verify(proof, VKEY)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = ProvingClient(BASE_URL, transport=httpx.MockTransport(handler))
        with pytest.raises(ProvingServiceError):
            await client.prove({})

    @pytest.mark.asyncio
    async def test_get_vkey(self):
        client = ProvingClient(
            BASE_URL, transport=_transport({("GET", "/vkey"): lambda r: (200, {"vkey": VKEY})})
        )
        assert await client.get_vkey() == VKEY

    @pytest.mark.asyncio
    async def test_get_vkey_missing(self):
        client = ProvingClient(
            BASE_URL, transport=_transport({("GET", "/vkey"): lambda r: (200, {})})
        )
        with pytest.raises(ProvingServiceError):
            await client.get_vkey()

    @pytest.mark.asyncio
    async def test_health_check(self):
        healthy = ProvingClient(
            BASE_URL, transport=_transport({("GET", "/health"): lambda r: (200, {"status": "ok"})})
        )
        unhealthy = ProvingClient(BASE_URL, transport=_transport({}))
        assert await healthy.health_check() is True
        assert await unhealthy.health_check() is False

    @pytest.mark.asyncio
    async def test_non_json_body(self, proof):
        client = ProvingClient(BASE_URL, transport=_raw_transport(200, "<html>bad gateway</html>"))
        with pytest.raises(ProvingServiceError):
            await client.verify(proof, VKEY)
        with pytest.raises(ProvingServiceError):
            await client.get_vkey()

    @pytest.mark.asyncio
    async def test_non_object_body(self, proof):
        client = ProvingClient(
            BASE_URL, transport=_transport({("POST", "/verify"): lambda r: (200, ["verified"])})
        )
        with pytest.raises(ProvingServiceError):
            await client.verify(proof, VKEY)

    @pytest.mark.asyncio
    async def test_bridge_reports_non_json_as_unverified(self, proof):
        client = ProvingClient(BASE_URL, transport=_raw_transport(200, "<html>bad gateway</html>"))
        result = await ProofService(proving_client=client, ipfs_client=IPFSClient(BASE_URL)).verify_proof(
            proof, vkey=VKEY
        )

        assert result["verified"] is False
        assert "invalid JSON" in result["error"]


class TestIPFSClient:
    """Test proof persistence through the IPFS gateway service."""

    @pytest.mark.asyncio
    async def test_store_proof(self, proof):
        seen = {}

        def store(request):
            seen.update(json.loads(request.content))
            return 201, {"ipfs_cid": "QmTest", "composite_hash": seen["composite_hash"]}

        client = IPFSClient(BASE_URL, transport=_transport({("POST", "/store"): store}))
        assert await client.store_proof(proof) == "QmTest"
        assert seen["composite_hash"] == proof.content_hash()
        stored = json.loads(base64.b64decode(seen["proof"]))
        assert ProofWithPublicValues.from_dict(stored) == proof

    @pytest.mark.asyncio
    async def test_store_without_cid(self, proof):
        client = IPFSClient(BASE_URL, transport=_transport({("POST", "/store"): lambda r: (201, {})}))
        with pytest.raises(ProofStorageError):
            await client.store_proof(proof)

    @pytest.mark.asyncio
    async def test_retrieve_proof(self, proof):
        encoded = base64.b64encode(json.dumps(proof.to_dict()).encode("utf-8")).decode("utf-8")
        route = ("GET", f"/retrieve/{proof.content_hash()}")
        client = IPFSClient(
            BASE_URL, transport=_transport({route: lambda r: (200, {"proof": encoded, "ipfs_cid": "QmTest"})})
        )
        assert await client.retrieve_proof(proof.content_hash()) == proof

    @pytest.mark.asyncio
    async def test_retrieve_missing(self):
        client = IPFSClient(BASE_URL, transport=_transport({}))
        assert await client.retrieve_proof("00" * 32) is None

    @pytest.mark.asyncio
    async def test_service_unavailable(self, proof):
        client = IPFSClient(
            BASE_URL, transport=_transport({("POST", "/store"): lambda r: (503, {"error": "down"})})
        )
        with pytest.raises(ProofStorageError):
            await client.store_proof(proof)

    @pytest.mark.asyncio
    async def test_non_json_body(self, proof):
        client = IPFSClient(BASE_URL, transport=_raw_transport(200, "<html>bad gateway</html>"))
        with pytest.raises(ProofStorageError):
            await client.retrieve_proof(proof.content_hash())
        with pytest.raises(ProofStorageError):
            await client.store_proof(proof)
