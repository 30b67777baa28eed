import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Config
from .routes import health_router, proof_router, verify_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Attestation Age Proof Service", version=__version__)

# The verification bridge is called from browsers
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(proof_router)
app.include_router(verify_router)
app.include_router(health_router)


@app.get("/")
async def root():
    return {"service": "zkattest", "version": __version__, "status": "running"}


def run():
    import uvicorn
    uvicorn.run(
        "zkattest.main:app",
        host=Config.HOST,
        port=Config.PORT,
        log_level="info"
    )


if __name__ == "__main__":
    run()
