"""Proposal lifecycle: pending -> in-progress -> completed, forward only"""

from enum import Enum

from ...errors import StateConflictError


class ProposalStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class CompletionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


# Each state has exactly one successor; completed is terminal
PROPOSAL_TRANSITIONS = {
    ProposalStatus.PENDING: ProposalStatus.IN_PROGRESS,
    ProposalStatus.IN_PROGRESS: ProposalStatus.COMPLETED,
}

COMPLETION_TRANSITIONS = {
    CompletionStatus.PENDING: CompletionStatus.CONFIRMED,
}


def can_transition(current: str, target: str) -> bool:
    return PROPOSAL_TRANSITIONS.get(ProposalStatus(current)) == ProposalStatus(target)


def ensure_transition(current: str, target: str, message: str) -> None:
    """Raise StateConflictError unless current -> target is a valid proposal move."""
    if not can_transition(current, target):
        raise StateConflictError(message)


def ensure_completion_transition(current: str, target: str, message: str) -> None:
    if COMPLETION_TRANSITIONS.get(CompletionStatus(current)) != CompletionStatus(target):
        raise StateConflictError(message)
