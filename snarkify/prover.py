"""
Snarkify proving backend.

Maps the ProvingService contract onto the Snarkify REST API:

  Operation    Method  Path
  ───────────  ──────  ─────────────────────────────────────────────────
  get_vk       GET     /v1/scroll/sdk/vks/versions/{version}/types/{type}
  prove        POST    /v1/services/{service_id}
  query_task   GET     /v1/tasks/{task_id}

Guarantees:
- Never raises: every failure is logged and folded into `error`
- prove failures report status Failed, query failures report Queued
- The caller's input is echoed back from prove, success or failure
- No task state is cached between calls
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from prover.base import ProvingService
from prover.types import (
    CircuitType,
    GetVkRequest,
    GetVkResponse,
    ProveRequest,
    ProveResponse,
    QueryTaskRequest,
    QueryTaskResponse,
    TaskStatus,
)

from .client import SnarkifyClient
from .errors import SnarkifyClientError, TaskInputDecodeError
from .mapping import compute_time, map_task_state, to_epoch_seconds
from .retry import RetryPolicy
from .schemas import (
    SnarkifyCreateTaskInput,
    SnarkifyCreateTaskRequest,
    SnarkifyGetTaskResponse,
    SnarkifyGetVkResponse,
)

logger = logging.getLogger(__name__)

API_VERSION = "v1"


class SnarkifyProver(ProvingService):
    """Remote proving backend backed by the Snarkify platform."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        service_id: str,
        connection_timeout_sec: float = 30,
        retry_wait_time_sec: float = 10,
        retry_count: int = 3,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleeper: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.service_id = service_id
        self.client = SnarkifyClient(
            base_url=base_url,
            api_key=api_key,
            timeout_s=connection_timeout_sec,
            retry_policy=RetryPolicy.from_wait_time(retry_wait_time_sec, retry_count),
            transport=transport,
            sleeper=sleeper,
        )

    def is_local(self) -> bool:
        return False

    async def aclose(self) -> None:
        await self.client.aclose()

    # ──────────────────────────────────────────────────────────
    # CONTRACT
    # ──────────────────────────────────────────────────────────

    async def get_vk(self, request: GetVkRequest) -> GetVkResponse:
        path = (
            f"/{API_VERSION}/scroll/sdk/vks/versions/{request.circuit_version}"
            f"/types/{request.circuit_type.to_u8()}"
        )
        try:
            resp = await self.client.get(path, SnarkifyGetVkResponse)
        except Exception as e:
            self._log_failure("get_vk", e)
            return GetVkResponse(vk="", error=f"Failed to get vk: {e}")

        return GetVkResponse(vk=resp.vk, error=None)

    async def prove(self, request: ProveRequest) -> ProveResponse:
        body = SnarkifyCreateTaskRequest.from_prove_request(request)
        path = f"/{API_VERSION}/services/{self.service_id}"
        try:
            resp = await self.client.post(path, body, SnarkifyGetTaskResponse)
            status = map_task_state(resp.state)
        except Exception as e:
            self._log_failure("prove", e)
            return self.build_prove_error_response(
                request, f"Failed to request proof: {e}"
            )

        created_at = to_epoch_seconds(resp.created)
        # A freshly created task cannot have finished yet
        return ProveResponse(
            task_id=resp.task_id,
            circuit_type=request.circuit_type,
            circuit_version=request.circuit_version,
            hard_fork_name=request.hard_fork_name,
            status=status,
            created_at=created_at if created_at is not None else 0.0,
            started_at=to_epoch_seconds(resp.started),
            finished_at=None,
            compute_time_sec=None,
            input=request.input,
            proof=None,
            vk=None,
            error=None,
        )

    async def query_task(self, request: QueryTaskRequest) -> QueryTaskResponse:
        path = f"/{API_VERSION}/tasks/{request.task_id}"
        try:
            resp = await self.client.get(path, SnarkifyGetTaskResponse)
            status = map_task_state(resp.state)
        except Exception as e:
            self._log_failure("query_task", e)
            return self.build_query_task_error_response(
                request, f"Failed to query proof: {e}"
            )

        try:
            task_input = self._decode_task_input(resp.input)
        except TaskInputDecodeError as e:
            self._log_failure("query_task", e)
            return self.build_query_task_error_response(
                request, f"Failed to parse task input: {e}"
            )

        created_at = to_epoch_seconds(resp.created)
        started_at = to_epoch_seconds(resp.started)
        finished_at = to_epoch_seconds(resp.finished)

        return QueryTaskResponse(
            task_id=resp.task_id,
            circuit_type=task_input.circuit_type,
            circuit_version=task_input.circuit_version,
            hard_fork_name=task_input.hard_fork_name,
            status=status,
            created_at=created_at if created_at is not None else 0.0,
            started_at=started_at,
            finished_at=finished_at,
            compute_time_sec=compute_time(started_at, finished_at),
            input=task_input.task_data,
            proof=resp.proof,
            vk=None,
            error=resp.error,
        )

    # ──────────────────────────────────────────────────────────
    # FAILURE SHAPES
    # ──────────────────────────────────────────────────────────

    def build_prove_error_response(self, request: ProveRequest, error_msg: str) -> ProveResponse:
        return ProveResponse(
            task_id="",
            circuit_type=request.circuit_type,
            circuit_version=request.circuit_version,
            hard_fork_name=request.hard_fork_name,
            status=TaskStatus.Failed,
            created_at=0.0,
            input=request.input,
            error=error_msg,
        )

    def build_query_task_error_response(
        self,
        request: QueryTaskRequest,
        error_msg: str,
    ) -> QueryTaskResponse:
        # Queued is a neutral default, not a claim about the remote task
        return QueryTaskResponse(
            task_id=request.task_id,
            circuit_type=CircuitType.Undefined,
            circuit_version="",
            hard_fork_name="",
            status=TaskStatus.Queued,
            created_at=0.0,
            input=None,
            error=error_msg,
        )

    # ──────────────────────────────────────────────────────────
    # HELPERS
    # ──────────────────────────────────────────────────────────

    @staticmethod
    def _decode_task_input(raw: str) -> SnarkifyCreateTaskInput:
        try:
            return SnarkifyCreateTaskInput.model_validate_json(raw)
        except ValidationError as e:
            raise TaskInputDecodeError(str(e)) from e

    @staticmethod
    def _log_failure(method: str, error: Exception) -> None:
        if isinstance(error, SnarkifyClientError):
            logger.error(f"{method} method failed: {error!r}")
        else:
            logger.error(f"{method} method failed: {error!r}", exc_info=True)
