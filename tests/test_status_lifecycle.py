# =============================================================================
# Status Lifecycle Tests
# =============================================================================
"""
Unit tests for the application status state machine.
"""

from datetime import date
from itertools import product

import pytest

from job_tracker.database.models import JobApplication
from job_tracker.models.job import LEGACY_STATUSES, ApplicationStatus
from job_tracker.services.status_lifecycle import (
    STATUS_TRANSITIONS,
    TERMINAL_STATUSES,
    InvalidStatusError,
    InvalidStatusTransitionError,
    apply_transition,
    can_transition,
    is_terminal,
    parse_status,
    valid_transitions,
)


S = ApplicationStatus

ALLOWED = {
    (S.APPLIED, S.INTERVIEW),
    (S.APPLIED, S.REJECTED),
    (S.APPLIED, S.WITHDRAWN),
    (S.INTERVIEW, S.INTERVIEWING),
    (S.INTERVIEW, S.REJECTED),
    (S.INTERVIEW, S.WITHDRAWN),
    (S.INTERVIEWING, S.WAITING),
    (S.INTERVIEWING, S.OFFER),
    (S.INTERVIEWING, S.REJECTED),
    (S.INTERVIEWING, S.WITHDRAWN),
    (S.WAITING, S.INTERVIEW),
    (S.WAITING, S.INTERVIEWING),
    (S.WAITING, S.OFFER),
    (S.WAITING, S.REJECTED),
    (S.WAITING, S.WITHDRAWN),
    (S.OFFER, S.ACCEPTED),
    (S.OFFER, S.REJECTED),
    (S.OFFER, S.WITHDRAWN),
}


# -----------------------------------------------------------------------------
# Transition Table
# -----------------------------------------------------------------------------
class TestTransitionTable:
    """Tests for the shape of the transition table."""

    def test_every_status_has_an_entry(self) -> None:
        assert set(STATUS_TRANSITIONS) == set(ApplicationStatus)

    def test_targets_are_in_vocabulary(self) -> None:
        for targets in STATUS_TRANSITIONS.values():
            assert targets <= set(ApplicationStatus)

    def test_terminal_statuses(self) -> None:
        assert TERMINAL_STATUSES == {S.ACCEPTED, S.REJECTED, S.WITHDRAWN}
        for status in TERMINAL_STATUSES:
            assert valid_transitions(status) == frozenset()
            assert is_terminal(status)

    def test_non_terminal_statuses(self) -> None:
        for status in set(ApplicationStatus) - TERMINAL_STATUSES:
            assert not is_terminal(status)

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            STATUS_TRANSITIONS[S.APPLIED] = frozenset()  # type: ignore[index]

    def test_legacy_statuses_are_in_vocabulary(self) -> None:
        assert LEGACY_STATUSES <= set(ApplicationStatus)

    @pytest.mark.parametrize("current, desired", list(product(ApplicationStatus, repeat=2)))
    def test_can_transition_matches_table(self, current, desired) -> None:
        assert can_transition(current, desired) is ((current, desired) in ALLOWED)


# -----------------------------------------------------------------------------
# Applying Transitions
# -----------------------------------------------------------------------------
class TestApplyTransition:
    """Tests for apply_transition."""

    def test_waiting_back_to_interview(self) -> None:
        change = apply_transition("waiting", "interview", today=date(2024, 3, 1))

        assert change.previous is S.WAITING
        assert change.status is S.INTERVIEW
        assert change.changed_on == date(2024, 3, 1)

    def test_waiting_to_applied_rejected(self) -> None:
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            apply_transition(S.WAITING, S.APPLIED)

        assert exc_info.value.current is S.WAITING
        assert exc_info.value.desired is S.APPLIED

    @pytest.mark.parametrize("status", list(ApplicationStatus))
    def test_same_status_is_not_a_transition(self, status: ApplicationStatus) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            apply_transition(status, status)

    def test_terminal_cannot_move(self) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            apply_transition(S.ACCEPTED, S.OFFER)

    def test_defaults_to_today(self) -> None:
        change = apply_transition(S.APPLIED, S.INTERVIEW)
        assert change.changed_on == date.today()

    def test_unknown_status(self) -> None:
        with pytest.raises(InvalidStatusError):
            apply_transition("applied", "ghosted")


class TestParseStatus:
    """Tests for parse_status."""

    def test_string_value(self) -> None:
        assert parse_status("offer") is S.OFFER

    def test_enum_passthrough(self) -> None:
        assert parse_status(S.WITHDRAWN) is S.WITHDRAWN

    @pytest.mark.parametrize("value", ["", "Applied", "pending", None, 3])
    def test_invalid_values(self, value) -> None:
        with pytest.raises(InvalidStatusError) as exc_info:
            parse_status(value)

        assert exc_info.value.value == value


class TestStoredRecordTerminal:
    """Tests that stored records agree with the lifecycle on terminal statuses."""

    @pytest.mark.parametrize("status", list(ApplicationStatus))
    def test_record_matches_lifecycle(self, status: ApplicationStatus) -> None:
        job = JobApplication(
            url="https://a.example/job",
            applied_date=date(2024, 1, 1),
            status=status.value,
        )

        assert job.is_terminal is is_terminal(status)
