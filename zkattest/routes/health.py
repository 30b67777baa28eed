from fastapi import APIRouter, Depends
from ..models.response import HealthResponse
from ..service.proof_service import ProofService
from .dependencies import get_proof_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(proof_service: ProofService = Depends(get_proof_service)):
    proving_ok = await proof_service.proving_client.health_check()
    ipfs_ok = await proof_service.ipfs_client.health_check()

    return HealthResponse(
        status="healthy",
        proving_service="healthy" if proving_ok else "unhealthy",
        ipfs_service="healthy" if ipfs_ok else "unhealthy",
    )
