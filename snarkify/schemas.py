"""
Snarkify REST API - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the wire contract between the adapter and the Snarkify platform.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from prover.types import CircuitType, ProveRequest


class SnarkifyTaskState(str, Enum):
    """Task states reported by the Snarkify platform."""

    QUEUED = "QUEUED"
    PROVING = "PROVING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


# ============================================================================
# REQUEST PAYLOADS (OUTPUT)
# ============================================================================

class SnarkifyCreateTaskInput(BaseModel):
    """
    Structured task input.

    Sent as the `input` object on task creation; the platform hands it
    back on task queries as a JSON-encoded string.
    """

    circuit_type: CircuitType
    circuit_version: str
    hard_fork_name: str
    task_data: str


class SnarkifyCreateTaskRequest(BaseModel):
    """Body of POST /v1/services/{service_id}."""

    input: SnarkifyCreateTaskInput

    @classmethod
    def from_prove_request(cls, request: ProveRequest) -> "SnarkifyCreateTaskRequest":
        return cls(
            input=SnarkifyCreateTaskInput(
                circuit_type=request.circuit_type,
                circuit_version=request.circuit_version,
                hard_fork_name=request.hard_fork_name,
                task_data=request.input,
            )
        )


# ============================================================================
# RESPONSE PAYLOADS (INPUT)
# ============================================================================

class SnarkifyGetVkResponse(BaseModel):
    """Body of GET /v1/scroll/sdk/vks/versions/{version}/types/{type}."""

    vk: str


class SnarkifyGetTaskResponse(BaseModel):
    """
    Task document returned by task creation and task queries.

    Creation responses omit `input`, `finished`, `proof` and `error`.
    """

    task_id: str
    state: SnarkifyTaskState
    input: str = Field(default="", description="JSON-encoded SnarkifyCreateTaskInput")
    created: Optional[datetime] = None
    started: Optional[datetime] = None
    finished: Optional[datetime] = None
    proof: Optional[str] = None
    error: Optional[str] = None

    @field_validator("state", mode="before")
    @classmethod
    def _normalize_state(cls, value):
        # The platform is not consistent about casing ("queued" vs "QUEUED")
        return value.upper() if isinstance(value, str) else value

    @field_validator("input", mode="before")
    @classmethod
    def _null_input_is_empty(cls, value):
        return "" if value is None else value
