"""Project status state machine.

Five labels, one fixed order, forward-only single steps:

    draft → prototype_generated → landing_page_created → campaign_launched → completed

Only ``draft → prototype_generated`` is driven by a handler today (prototype
generation). The remaining transitions are reserved for the landing-page and
campaign stages. Callers mutate status exclusively through
``advance_status`` so the ordering invariant lives in one place.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from ..models.project import Project


class ProjectStatus(str, Enum):
    DRAFT = "draft"
    PROTOTYPE_GENERATED = "prototype_generated"
    LANDING_PAGE_CREATED = "landing_page_created"
    CAMPAIGN_LAUNCHED = "campaign_launched"
    COMPLETED = "completed"


STATUS_ORDER: tuple[ProjectStatus, ...] = (
    ProjectStatus.DRAFT,
    ProjectStatus.PROTOTYPE_GENERATED,
    ProjectStatus.LANDING_PAGE_CREATED,
    ProjectStatus.CAMPAIGN_LAUNCHED,
    ProjectStatus.COMPLETED,
)


class InvalidStatusTransition(Exception):
    """Raised when a transition would not be the immediate forward step."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move project from '{current}' to '{target}'")


def next_status(current: ProjectStatus | str) -> Optional[ProjectStatus]:
    """Return the successor of *current*, or None when it is terminal."""
    idx = STATUS_ORDER.index(ProjectStatus(current))
    if idx + 1 >= len(STATUS_ORDER):
        return None
    return STATUS_ORDER[idx + 1]


def can_transition(current: ProjectStatus | str, target: ProjectStatus | str) -> bool:
    try:
        return next_status(current) == ProjectStatus(target)
    except ValueError:
        return False


def advance_status(project: Project, target: ProjectStatus | str) -> ProjectStatus:
    """Move *project* one step forward to *target*, in memory only.

    The caller owns the transaction: the new status is persisted by the same
    commit that persists whatever the transition represents.

    Raises
    ------
    InvalidStatusTransition
        If *target* is not the immediate successor of the current status.
    """
    current = project.status or ProjectStatus.DRAFT.value
    if not can_transition(current, target):
        raise InvalidStatusTransition(current, getattr(target, "value", target))

    new_status = ProjectStatus(target)
    now = datetime.utcnow()
    project.status = new_status.value
    project.updated_at = now
    if new_status is ProjectStatus.COMPLETED:
        project.completed_at = now
    return new_status
