"""Project status state machine — unit tests (no API/DB)."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from mvp_validator.models.project import Project
from mvp_validator.services.project_status import (
    STATUS_ORDER,
    InvalidStatusTransition,
    ProjectStatus,
    advance_status,
    can_transition,
    next_status,
)


def _project(status="draft"):
    return Project(idea_description="A scheduling tool for tutors", status=status)


class TestStatusOrder:
    def test_fixed_order(self):
        assert [s.value for s in STATUS_ORDER] == [
            "draft",
            "prototype_generated",
            "landing_page_created",
            "campaign_launched",
            "completed",
        ]

    def test_next_status(self):
        assert next_status("draft") is ProjectStatus.PROTOTYPE_GENERATED
        assert next_status(ProjectStatus.CAMPAIGN_LAUNCHED) is ProjectStatus.COMPLETED
        assert next_status("completed") is None

    def test_only_completed_has_no_successor(self):
        assert [s for s in STATUS_ORDER if next_status(s) is None] == [ProjectStatus.COMPLETED]


class TestCanTransition:
    @pytest.mark.parametrize("current,target", list(zip(STATUS_ORDER, STATUS_ORDER[1:])))
    def test_single_forward_steps_allowed(self, current, target):
        assert can_transition(current, target) is True

    @pytest.mark.parametrize(
        "current,target",
        [
            ("draft", "landing_page_created"),  # skip
            ("draft", "completed"),  # skip to end
            ("prototype_generated", "draft"),  # backwards
            ("draft", "draft"),  # self
            ("completed", "draft"),  # out of terminal
        ],
    )
    def test_other_moves_rejected(self, current, target):
        assert can_transition(current, target) is False

    def test_unknown_label_rejected(self):
        assert can_transition("draft", "archived") is False


class TestAdvanceStatus:
    def test_advance_from_draft(self):
        project = _project()
        result = advance_status(project, ProjectStatus.PROTOTYPE_GENERATED)
        assert result is ProjectStatus.PROTOTYPE_GENERATED
        assert project.status == "prototype_generated"
        assert project.updated_at is not None
        assert project.completed_at is None

    def test_completion_stamps_completed_at(self):
        project = _project("campaign_launched")
        advance_status(project, "completed")
        assert project.status == "completed"
        assert project.completed_at is not None

    def test_invalid_transition_leaves_project_untouched(self):
        project = _project("prototype_generated")
        with pytest.raises(InvalidStatusTransition) as exc_info:
            advance_status(project, ProjectStatus.PROTOTYPE_GENERATED)
        assert exc_info.value.current == "prototype_generated"
        assert exc_info.value.target == "prototype_generated"
        assert project.status == "prototype_generated"

    def test_walk_full_lifecycle(self):
        project = _project()
        for target in STATUS_ORDER[1:]:
            advance_status(project, target)
        assert project.status == "completed"
        with pytest.raises(InvalidStatusTransition):
            advance_status(project, "completed")
