"""
tests/prover/test_prover_types.py

Verifies:
✔ CircuitType u8 codes round through from_u8, unknown codes → Undefined
✔ TaskStatus terminal states
✔ Response defaults: created_at sentinel 0.0, optional fields unset
✔ Requests are immutable
"""

import pytest
from pydantic import ValidationError

from prover import (
    CircuitType,
    GetVkResponse,
    ProveRequest,
    QueryTaskResponse,
    TaskStatus,
)


class TestCircuitType:
    @pytest.mark.parametrize(
        "member, code",
        [
            (CircuitType.Undefined, 0),
            (CircuitType.Chunk, 1),
            (CircuitType.Batch, 2),
            (CircuitType.Bundle, 3),
        ],
    )
    def test_codes(self, member, code):
        assert member.to_u8() == code
        assert CircuitType.from_u8(code) is member

    def test_unknown_code_is_undefined(self):
        assert CircuitType.from_u8(42) is CircuitType.Undefined


class TestTaskStatus:
    def test_terminal(self):
        assert TaskStatus.Success.is_terminal
        assert TaskStatus.Failed.is_terminal

    def test_non_terminal(self):
        assert not TaskStatus.Queued.is_terminal
        assert not TaskStatus.Proving.is_terminal


class TestResponseDefaults:
    def test_task_defaults(self):
        resp = QueryTaskResponse()
        assert resp.created_at == 0.0
        assert resp.started_at is None
        assert resp.compute_time_sec is None
        assert resp.circuit_type == CircuitType.Undefined
        assert not resp.is_error

    def test_empty_error_is_not_error(self):
        assert not GetVkResponse(vk="x", error="").is_error

    def test_error_flag(self):
        assert GetVkResponse(error="boom").is_error


class TestRequests:
    def test_prove_request_frozen(self):
        request = ProveRequest(
            circuit_type=CircuitType.Chunk,
            circuit_version="v1",
            hard_fork_name="darwin",
            input="0x",
        )
        with pytest.raises(ValidationError):
            request.input = "changed"

    def test_prove_request_requires_input(self):
        with pytest.raises(ValidationError):
            ProveRequest(circuit_type=CircuitType.Chunk, circuit_version="v1", hard_fork_name="x")
