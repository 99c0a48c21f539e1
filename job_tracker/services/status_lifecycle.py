# =============================================================================
# Application Status Lifecycle
# =============================================================================
"""
Finite state machine for job application statuses.

    applied      -> interview, rejected, withdrawn
    interview    -> interviewing, rejected, withdrawn
    interviewing -> waiting, offer, rejected, withdrawn
    waiting      -> interview, interviewing, offer, rejected, withdrawn
    offer        -> accepted, rejected, withdrawn
    accepted, rejected, withdrawn are terminal

`waiting` is a follow-up holding state that can return to the interview
stages. Staying in the same status is not a transition.

Usage:
    from job_tracker.services.status_lifecycle import apply_transition

    change = apply_transition("waiting", "interview")
    job.status, job.status_updated_at = change.status, change.changed_on
"""

import logging
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional, Union

from job_tracker.models.job import ApplicationStatus


logger = logging.getLogger(__name__)


StatusLike = Union[ApplicationStatus, str]


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------
class InvalidStatusError(ValueError):
    """Raised for a status value outside the vocabulary."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid status: {value}")


class InvalidStatusTransitionError(ValueError):
    """
    Raised when a status change is not allowed by the lifecycle.

    Attributes:
        current: Status the application is in.
        desired: Status that was requested.
    """

    def __init__(self, current: ApplicationStatus, desired: ApplicationStatus) -> None:
        self.current = current
        self.desired = desired
        super().__init__(
            f"Cannot move application from '{current.value}' to '{desired.value}'"
        )


# -----------------------------------------------------------------------------
# Transition Table
# -----------------------------------------------------------------------------
_S = ApplicationStatus

STATUS_TRANSITIONS: Mapping[ApplicationStatus, frozenset[ApplicationStatus]] = (
    MappingProxyType(
        {
            _S.APPLIED: frozenset({_S.INTERVIEW, _S.REJECTED, _S.WITHDRAWN}),
            _S.INTERVIEW: frozenset({_S.INTERVIEWING, _S.REJECTED, _S.WITHDRAWN}),
            _S.INTERVIEWING: frozenset(
                {_S.WAITING, _S.OFFER, _S.REJECTED, _S.WITHDRAWN}
            ),
            _S.WAITING: frozenset(
                {_S.INTERVIEW, _S.INTERVIEWING, _S.OFFER, _S.REJECTED, _S.WITHDRAWN}
            ),
            _S.OFFER: frozenset({_S.ACCEPTED, _S.REJECTED, _S.WITHDRAWN}),
            _S.ACCEPTED: frozenset(),
            _S.REJECTED: frozenset(),
            _S.WITHDRAWN: frozenset(),
        }
    )
)

TERMINAL_STATUSES = frozenset(
    status for status, targets in STATUS_TRANSITIONS.items() if not targets
)


@dataclass(frozen=True)
class StatusChange:
    """
    An accepted status transition.

    Attributes:
        previous: Status before the change.
        status: New status.
        changed_on: Local calendar date of the change.
    """

    previous: ApplicationStatus
    status: ApplicationStatus
    changed_on: date


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------
def parse_status(value: StatusLike) -> ApplicationStatus:
    """
    Coerce a raw value into an ApplicationStatus.

    Args:
        value: Enum member or its string value.

    Returns:
        The matching status.

    Raises:
        InvalidStatusError: If the value is not in the vocabulary.
    """
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError as e:
        raise InvalidStatusError(value) from e


def valid_transitions(current: StatusLike) -> frozenset[ApplicationStatus]:
    """Statuses reachable from `current` in one transition."""
    return STATUS_TRANSITIONS[parse_status(current)]


def is_terminal(status: StatusLike) -> bool:
    return parse_status(status) in TERMINAL_STATUSES


def can_transition(current: StatusLike, desired: StatusLike) -> bool:
    """
    Check whether moving from `current` to `desired` is allowed.

    Args:
        current: Present status.
        desired: Requested status.

    Returns:
        True if `desired` is in the transition set of `current`.

    Raises:
        InvalidStatusError: If either value is outside the vocabulary.
    """
    return parse_status(desired) in valid_transitions(current)


def apply_transition(
    current: StatusLike,
    desired: StatusLike,
    today: Optional[date] = None,
) -> StatusChange:
    """
    Validate a status change and stamp it with the change date.

    Args:
        current: Present status.
        desired: Requested status.
        today: Date to record (defaults to the local calendar date).

    Returns:
        The accepted change.

    Raises:
        InvalidStatusError: If either value is outside the vocabulary.
        InvalidStatusTransitionError: If the lifecycle does not allow it.
    """
    current_status = parse_status(current)
    desired_status = parse_status(desired)

    if desired_status not in STATUS_TRANSITIONS[current_status]:
        logger.debug(
            f"Rejected transition {current_status.value} -> {desired_status.value}"
        )
        raise InvalidStatusTransitionError(current_status, desired_status)

    return StatusChange(
        previous=current_status,
        status=desired_status,
        changed_on=today or date.today(),
    )
