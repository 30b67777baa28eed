from .executor import ExecutionReport, LocalExecutor
from .ipfs_client import IPFSClient
from .loader import InputError, LoadedInput, load_input, parse_input
from .proof_service import ProofService
from .proof_store import ProofStorageError, ProofWithPublicValues
from .proving_client import ProvingClient, ProvingServiceError

__all__ = [
    "ExecutionReport",
    "LocalExecutor",
    "IPFSClient",
    "InputError",
    "LoadedInput",
    "load_input",
    "parse_input",
    "ProofService",
    "ProofStorageError",
    "ProofWithPublicValues",
    "ProvingClient",
    "ProvingServiceError",
]
