from .proof import router as proof_router
from .verify import router as verify_router
from .health import router as health_router

__all__ = ["proof_router", "verify_router", "health_router"]
