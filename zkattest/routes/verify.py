from fastapi import APIRouter, Depends
import logging
from ..models.request import VerifyRequest
from ..models.response import VerificationResponse
from ..service.proof_service import ProofService
from ..service.proof_store import ProofStorageError, ProofWithPublicValues
from .dependencies import get_proof_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/verify", tags=["verify"])


@router.post("", response_model=VerificationResponse)
async def verify_proof(request: VerifyRequest, proof_service: ProofService = Depends(get_proof_service)):
    try:
        proof = ProofWithPublicValues.from_dict(
            {"proof": request.proof, "public_values": request.public_values}
        )
    except ProofStorageError as e:
        return VerificationResponse(verified=False, error=str(e))

    result = await proof_service.verify_proof(proof, vkey=request.vkey)
    logger.info(f"Proof verification result: verified={result['verified']}")
    return VerificationResponse(verified=result["verified"], error=result["error"])
