from ..service.proof_service import ProofService


def get_proof_service() -> ProofService:
    return ProofService()
