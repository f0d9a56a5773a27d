from abc import ABC, abstractmethod

from .types import (
    GetVkRequest,
    GetVkResponse,
    ProveRequest,
    ProveResponse,
    QueryTaskRequest,
    QueryTaskResponse,
)


class ProvingService(ABC):
    """
    Abstract proving boundary.
    Host code must depend ONLY on this interface.

    Every operation is total: failures come back in the response's
    `error` field, never as an exception.
    """

    @abstractmethod
    def is_local(self) -> bool:
        """True when proofs are produced in-process rather than remotely."""
        raise NotImplementedError

    @abstractmethod
    async def get_vk(self, request: GetVkRequest) -> GetVkResponse:
        """Fetch the verification key for a circuit type/version."""
        raise NotImplementedError

    @abstractmethod
    async def prove(self, request: ProveRequest) -> ProveResponse:
        """Submit a proof task."""
        raise NotImplementedError

    @abstractmethod
    async def query_task(self, request: QueryTaskRequest) -> QueryTaskResponse:
        """Read the current state of a previously submitted task."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any held resources. No-op by default."""
        return None
