"""
Snarkify platform adapter.

Implements prover.ProvingService on top of the Snarkify REST API.

Example usage:
    from snarkify import SnarkifyProver
    from prover import GetVkRequest, CircuitType

    service = SnarkifyProver(
        base_url="https://api.snarkify.io",
        api_key="...",
        service_id="...",
    )
    response = await service.get_vk(
        GetVkRequest(circuit_type=CircuitType.Chunk, circuit_version="v1.2")
    )
    await service.aclose()
"""

from .errors import (
    SnarkifyClientError,
    UrlError,
    TransportError,
    RequestTimeoutError,
    StatusError,
    DecodeError,
    TaskInputDecodeError,
)
from .retry import RetryPolicy, TRANSIENT_STATUS_CODES
from .client import SnarkifyClient, build_url
from .prover import SnarkifyProver, API_VERSION

__all__ = [
    "SnarkifyClientError",
    "UrlError",
    "TransportError",
    "RequestTimeoutError",
    "StatusError",
    "DecodeError",
    "TaskInputDecodeError",
    "RetryPolicy",
    "TRANSIENT_STATUS_CODES",
    "SnarkifyClient",
    "build_url",
    "SnarkifyProver",
    "API_VERSION",
]
