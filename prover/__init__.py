"""
Proving service boundary.

This package defines the three-operation contract a host uses to obtain
proofs, independent of where they are produced.

Supported backends:
- StubProvingService: Deterministic fake prover (default for CI/tests)
- SnarkifyProver (in the `snarkify` package): remote Snarkify platform

Example usage:
    from prover import StubProvingService, ProveRequest, CircuitType

    service = StubProvingService()
    request = ProveRequest(
        circuit_type=CircuitType.Chunk,
        circuit_version="v1.2",
        hard_fork_name="darwin",
        input="0xdead",
    )
    response = await service.prove(request)
"""

from .types import (
    CircuitType,
    TaskStatus,
    GetVkRequest,
    GetVkResponse,
    ProveRequest,
    ProveResponse,
    QueryTaskRequest,
    QueryTaskResponse,
    TaskResponse,
)
from .base import ProvingService
from .stub import StubProvingService

__all__ = [
    "CircuitType",
    "TaskStatus",
    "GetVkRequest",
    "GetVkResponse",
    "ProveRequest",
    "ProveResponse",
    "QueryTaskRequest",
    "QueryTaskResponse",
    "TaskResponse",
    "ProvingService",
    "StubProvingService",
]
