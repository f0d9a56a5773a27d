from typing import Dict, List

from .base import ProvingService
from .types import (
    CircuitType,
    GetVkRequest,
    GetVkResponse,
    ProveRequest,
    ProveResponse,
    QueryTaskRequest,
    QueryTaskResponse,
    TaskStatus,
)

# Fixed synthetic clock so stub output is reproducible
_STUB_CREATED_AT = 1_700_000_000.0
_STUB_STARTED_AT = 1_700_000_010.0
_STUB_FINISHED_AT = 1_700_000_042.5

_PROGRESSION: List[TaskStatus] = [
    TaskStatus.Queued,
    TaskStatus.Proving,
    TaskStatus.Success,
]


class StubProvingService(ProvingService):
    """
    Deterministic fake proving backend for testing and CI.

    No network. Each query of a known task advances it one step:
    Queued → Proving → Success, then stays at Success.

    Submitted tasks are kept for the life of the instance and never evicted.
    """

    def __init__(self):
        self._tasks: Dict[str, ProveRequest] = {}
        self._steps: Dict[str, int] = {}

    def is_local(self) -> bool:
        return True

    async def get_vk(self, request: GetVkRequest) -> GetVkResponse:
        return GetVkResponse(
            vk=f"stub-vk-{request.circuit_version}-{request.circuit_type.to_u8()}"
        )

    async def prove(self, request: ProveRequest) -> ProveResponse:
        task_id = f"stub-{len(self._tasks) + 1}"
        self._tasks[task_id] = request
        self._steps[task_id] = 0

        return ProveResponse(
            task_id=task_id,
            circuit_type=request.circuit_type,
            circuit_version=request.circuit_version,
            hard_fork_name=request.hard_fork_name,
            status=TaskStatus.Queued,
            created_at=_STUB_CREATED_AT,
            input=request.input,
        )

    async def query_task(self, request: QueryTaskRequest) -> QueryTaskResponse:
        submitted = self._tasks.get(request.task_id)
        if submitted is None:
            return QueryTaskResponse(
                task_id=request.task_id,
                circuit_type=CircuitType.Undefined,
                status=TaskStatus.Queued,
                error=f"Failed to query proof: unknown task {request.task_id}",
            )

        step = min(self._steps[request.task_id] + 1, len(_PROGRESSION) - 1)
        self._steps[request.task_id] = step
        status = _PROGRESSION[step]

        started_at = _STUB_STARTED_AT if status != TaskStatus.Queued else None
        finished_at = _STUB_FINISHED_AT if status.is_terminal else None
        compute_time_sec = (
            finished_at - started_at
            if started_at is not None and finished_at is not None
            else None
        )

        return QueryTaskResponse(
            task_id=request.task_id,
            circuit_type=submitted.circuit_type,
            circuit_version=submitted.circuit_version,
            hard_fork_name=submitted.hard_fork_name,
            status=status,
            created_at=_STUB_CREATED_AT,
            started_at=started_at,
            finished_at=finished_at,
            compute_time_sec=compute_time_sec,
            input=submitted.input,
            proof=f"stub-proof-{request.task_id}" if status == TaskStatus.Success else None,
        )
