"""Project persistence — intake, ownership-scoped reads, prototype commit.

Ownership is part of every lookup: a project that exists but belongs to
someone else is reported exactly like a missing one.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..agents.prototype_agent.schema import GeneratedPrototype
from ..models.project import Project
from ..models.prototype import Prototype
from ..schemas.project_schema import NewProjectInput
from ..schemas.prototype_schema import PrototypeRecord
from .errors import PersistenceError, ProjectNotFoundError
from .project_status import InvalidStatusTransition, ProjectStatus, advance_status

logger = logging.getLogger(__name__)


def create_project(db: Session, payload: NewProjectInput, *, user_id: str) -> Project:
    """Persist a validated project in ``draft`` and return the ORM instance."""
    project = Project(
        user_id=user_id,
        idea_description=payload.idea_description,
        target_audience=payload.target_audience,
        price_point=payload.price_point,
        business_model=payload.business_model,
        status=ProjectStatus.DRAFT.value,
    )
    db.add(project)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create project for user %s", user_id)
        raise PersistenceError("Failed to create project") from exc
    db.refresh(project)
    return project


def list_projects(db: Session, *, user_id: str) -> List[Project]:
    return (
        db.query(Project)
        .filter(Project.user_id == user_id)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )


def get_owned_project(db: Session, project_id: int, *, user_id: str) -> Project:
    """Return the project if it exists AND belongs to *user_id*.

    Raises ProjectNotFoundError otherwise.
    """
    project = (
        db.query(Project)
        .filter(Project.id == project_id, Project.user_id == user_id)
        .first()
    )
    if project is None:
        raise ProjectNotFoundError(f"Project {project_id} not found")
    return project


def save_generated_prototype(db: Session, project: Project, generated: GeneratedPrototype) -> Prototype:
    """Insert the prototype and advance the project in ONE transaction.

    If the commit fails nothing is kept: the session is rolled back, so the
    project stays in ``draft`` and no prototype row exists.

    Raises
    ------
    InvalidStatusTransition
        If the project is not in ``draft``, or a concurrent request stored
        its prototype first (unique ``project_id``).
    PersistenceError
        If the commit fails.
    """
    project_id = project.id
    advance_status(project, ProjectStatus.PROTOTYPE_GENERATED)

    content = generated.content
    prototype = Prototype(
        project_id=project.id,
        hero_copy=content.hero_copy,
        features_json=json.dumps(content.features),
        pricing_structure=content.pricing_copy,
        wireframe_data=json.dumps({"valuePropositions": content.value_propositions}),
        generation_source=generated.source,
        fallback_reason=generated.fallback_reason,
        generated_at=datetime.utcnow(),
    )
    db.add(prototype)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Prototype for project %s already stored by another request", project_id)
        raise InvalidStatusTransition(
            ProjectStatus.PROTOTYPE_GENERATED.value, ProjectStatus.PROTOTYPE_GENERATED.value
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to persist prototype for project %s: status left unchanged", project_id)
        raise PersistenceError("Failed to create prototype") from exc

    db.refresh(prototype)
    db.refresh(project)
    return prototype


def _load_json(raw: str | None, default):
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Unreadable JSON column on prototype — returning default")
        return default


def prototype_to_record(prototype: Prototype) -> PrototypeRecord:
    """Convert a Prototype ORM instance, decoding its JSON columns."""
    wireframe = _load_json(prototype.wireframe_data, {})
    value_props = wireframe.get("valuePropositions", []) if isinstance(wireframe, dict) else []
    features = _load_json(prototype.features_json, [])

    return PrototypeRecord(
        id=prototype.id,
        project_id=prototype.project_id,
        hero_copy=prototype.hero_copy or "",
        features=features if isinstance(features, list) else [],
        pricing_structure=prototype.pricing_structure or "",
        value_propositions=value_props if isinstance(value_props, list) else [],
        generation_source=prototype.generation_source or "ai",
        fallback_reason=prototype.fallback_reason,
        generated_at=prototype.generated_at or prototype.created_at or datetime.utcnow(),
    )
