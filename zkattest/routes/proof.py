from fastapi import APIRouter, Depends, HTTPException
import logging
from eth_utils import encode_hex
from ..models.request import ExecuteRequest, ProofGenerationRequest
from ..models.response import ExecutionResponse, ProofGenerationResponse, PublicOutputModel
from ..program import ProgramAbort
from ..service.executor import describe_output
from ..service.loader import InputError
from ..service.proof_service import ProofService
from ..service.proving_client import ProvingServiceError
from .dependencies import get_proof_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["proof"])


def _abort_detail(e: ProgramAbort) -> dict:
    return {"failure": e.kind.value, "message": str(e)}


@router.post("/execute", response_model=ExecutionResponse)
async def execute(request: ExecuteRequest, proof_service: ProofService = Depends(get_proof_service)):
    try:
        report = proof_service.execute(
            request.attestation,
            threshold_age=request.threshold_age,
            current_timestamp=request.current_timestamp,
        )
    except InputError as e:
        logger.error(f"Validation error: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except ProgramAbort as e:
        logger.info(f"Attestation rejected: {e.kind.value}")
        raise HTTPException(status_code=422, detail=_abort_detail(e))

    return ExecutionResponse(
        status="success",
        public_values=encode_hex(report.public_values),
        output=PublicOutputModel(**describe_output(report.decoded)),
    )


@router.post("/generate-proof", response_model=ProofGenerationResponse)
async def generate_proof(request: ProofGenerationRequest, proof_service: ProofService = Depends(get_proof_service)):
    try:
        result = await proof_service.generate_and_store_proof(
            request.attestation,
            threshold_age=request.threshold_age,
            current_timestamp=request.current_timestamp,
        )
    except InputError as e:
        logger.error(f"Validation error: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except ProgramAbort as e:
        logger.info(f"Attestation rejected: {e.kind.value}")
        raise HTTPException(status_code=422, detail=_abort_detail(e))
    except ProvingServiceError as e:
        logger.error(f"Proof generation failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Proof generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    return ProofGenerationResponse(
        status="success",
        ipfs_cid=result["ipfs_cid"],
        vkey=result["vkey"],
        public_values=result["public_values"],
        output=PublicOutputModel(**result["output"]),
        verified=result["verified"],
        reused=result["reused"],
        warning=result["warning"],
    )
