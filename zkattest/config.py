import os


class Config:
    PORT: int = int(os.getenv("PORT", "8080"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    PROVING_SERVICE_URL: str = os.getenv(
        "PROVING_SERVICE_URL",
        "http://proving-service.zkattest.svc.cluster.local:8080"
    )
    IPFS_SERVICE_URL: str = os.getenv(
        "IPFS_SERVICE_URL",
        "http://ipfs-service.zkattest.svc.cluster.local:80"
    )

    PROVING_TIMEOUT: int = int(os.getenv("PROVING_TIMEOUT", "1800"))
    IPFS_TIMEOUT: int = int(os.getenv("IPFS_TIMEOUT", "300"))

    # 18 years of 365 days
    THRESHOLD_AGE: int = int(os.getenv("THRESHOLD_AGE", str(18 * 365 * 24 * 60 * 60)))

    INPUT_PATH: str = os.getenv("INPUT_PATH", "./input.json")
    PROOF_PATH: str = os.getenv("PROOF_PATH", "proof.bin")
    VERIFICATION_KEY: str = os.getenv("VERIFICATION_KEY", "")
