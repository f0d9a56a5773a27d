"""
tests/snarkify/test_mapping.py

Verifies:
✔ Every remote state maps to exactly one TaskStatus and all are reachable
✔ Remote state parsing is case-insensitive and closed
✔ Timestamps convert to epoch seconds; naive values read as UTC
✔ compute_time is the exact difference, None unless both ends known
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from prover import TaskStatus
from snarkify.mapping import compute_time, map_task_state, to_epoch_seconds
from snarkify.schemas import SnarkifyGetTaskResponse, SnarkifyTaskState


class TestMapTaskState:
    @pytest.mark.parametrize(
        "state, expected",
        [
            (SnarkifyTaskState.QUEUED, TaskStatus.Queued),
            (SnarkifyTaskState.PROVING, TaskStatus.Proving),
            (SnarkifyTaskState.SUCCESS, TaskStatus.Success),
            (SnarkifyTaskState.FAILED, TaskStatus.Failed),
        ],
    )
    def test_one_to_one(self, state, expected):
        assert map_task_state(state) == expected

    def test_every_status_reachable(self):
        mapped = {map_task_state(s) for s in SnarkifyTaskState}
        assert mapped == set(TaskStatus)

    def test_unmapped_value_raises(self):
        with pytest.raises(ValueError):
            map_task_state("PAUSED")  # type: ignore[arg-type]


class TestRemoteStateParsing:
    @pytest.mark.parametrize("raw", ["queued", "QUEUED", "Queued"])
    def test_case_insensitive(self, raw):
        resp = SnarkifyGetTaskResponse.model_validate({"task_id": "t", "state": raw})
        assert resp.state is SnarkifyTaskState.QUEUED

    def test_unknown_state_rejected(self):
        with pytest.raises(ValidationError):
            SnarkifyGetTaskResponse.model_validate({"task_id": "t", "state": "paused"})


class TestTimestamps:
    def test_none_is_none(self):
        assert to_epoch_seconds(None) is None

    def test_aware_datetime(self):
        dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert to_epoch_seconds(dt) == 1704067200.0

    def test_naive_datetime_treated_as_utc(self):
        assert to_epoch_seconds(datetime(2024, 1, 1)) == 1704067200.0

    def test_offset_datetime(self):
        dt = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
        assert to_epoch_seconds(dt) == 1704067200.0

    def test_fractional_seconds_kept(self):
        dt = datetime(2024, 1, 1, 0, 0, 10, 500000, tzinfo=timezone.utc)
        assert to_epoch_seconds(dt) == 1704067210.5


class TestComputeTime:
    def test_both_present(self):
        assert compute_time(10.25, 70.0) == 70.0 - 10.25

    def test_fractional_not_rounded(self):
        assert compute_time(1.0, 2.5) == 1.5

    @pytest.mark.parametrize("started, finished", [(None, 5.0), (5.0, None), (None, None)])
    def test_missing_end_gives_none(self, started, finished):
        assert compute_time(started, finished) is None
