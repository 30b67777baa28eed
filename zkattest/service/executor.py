import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from eth_utils import encode_hex, to_checksum_address

from ..core import output
from ..core.types import PublicOutput
from ..program import run

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    public_values: bytes
    decoded: PublicOutput


class LocalExecutor:
    """Runs the guest program in-process, without generating a proof."""

    def execute(self, stdin: Mapping[str, Any]) -> ExecutionReport:
        public_values = run(stdin)
        logger.info("Program executed successfully")
        return ExecutionReport(public_values=public_values, decoded=output.decode(public_values))


def describe_output(decoded: PublicOutput) -> Dict[str, Any]:
    return {
        "signer": to_checksum_address(decoded.signer),
        "threshold_age": decoded.threshold_age,
        "current_timestamp": decoded.current_timestamp,
        "attest_time": decoded.attest_time,
        "recipient": to_checksum_address(decoded.recipient),
        "domain_separator": encode_hex(decoded.domain_separator),
    }
