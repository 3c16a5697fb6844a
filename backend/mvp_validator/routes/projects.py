"""Project routes — intake, reads, prototype generation and repo provisioning.

Endpoints:
  POST /projects                          — Create a project (status draft)
  GET  /projects                          — List the caller's projects
  GET  /projects/{project_id}             — Project with its stage rows
  POST /projects/{project_id}/generate-prototype
  POST /projects/{project_id}/repo        — Create + link a GitHub repository
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..agents.prototype_agent.generator import generate_prototype_content
from ..database import get_db
from ..models.user import User
from ..schemas.github_schema import RepoCreateRequest, RepoProvisionResponse
from ..schemas.project_schema import (
    AnalyticsRecord,
    CampaignRecord,
    LandingPageRecord,
    NewProjectInput,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectRecord,
)
from ..schemas.prototype_schema import GeneratePrototypeResponse
from ..services.auth_dependency import get_current_user
from ..services.errors import GitHubNotConnectedError, PersistenceError, ProjectNotFoundError
from ..services.project_service import (
    create_project,
    get_owned_project,
    list_projects,
    prototype_to_record,
    save_generated_prototype,
)
from ..services.project_status import InvalidStatusTransition, ProjectStatus
from ..services.repo_provisioning import (
    ProvisioningOutcome,
    ProvisioningStage,
    provision_repository,
)
from ..services.user_service import require_credential

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
)


# ── Helpers ──────────────────────────────────────────────────────────────

def _owned_or_404(db: Session, project_id: int, user: User):
    try:
        return get_owned_project(db, project_id, user_id=user.id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )


def _optional(schema, row):
    return schema.model_validate(row) if row is not None else None


# ── Routes ───────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=ProjectRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create Project",
)
def create(
    payload: NewProjectInput,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectRecord:
    """Persist a new project in ``draft`` for the caller."""
    try:
        project = create_project(db, payload, user_id=current_user.id)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create project",
        )
    print(f"✅ [PROJECT] Created project {project.id} for user {current_user.id}")
    return ProjectRecord.model_validate(project)


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List Projects",
)
def list_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectListResponse:
    projects = list_projects(db, user_id=current_user.id)
    return ProjectListResponse(
        projects=[ProjectRecord.model_validate(p) for p in projects]
    )


@router.get(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Get Project",
)
def get_one(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectDetailResponse:
    """Return one owned project with prototype, landing page, campaign and analytics."""
    project = _owned_or_404(db, project_id, current_user)
    return ProjectDetailResponse(
        project=ProjectRecord.model_validate(project),
        prototype=prototype_to_record(project.prototype) if project.prototype else None,
        landing_page=_optional(LandingPageRecord, project.landing_page),
        campaign=_optional(CampaignRecord, project.campaign),
        analytics=_optional(AnalyticsRecord, project.analytics),
    )


@router.post(
    "/{project_id}/generate-prototype",
    response_model=GeneratePrototypeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Prototype Copy",
)
async def generate_prototype(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> GeneratePrototypeResponse:
    """Generate marketing copy for a draft project and advance its status.

    Rules:
    - Project must exist and belong to the caller → else 404
    - Project must be in ``draft`` → else 409 (no regeneration)
    - LLM problems degrade to template copy, reported in the response
    """
    project = _owned_or_404(db, project_id, current_user)

    if project.status != ProjectStatus.DRAFT.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Prototype already generated (project status is '{project.status}')",
        )

    generated = await generate_prototype_content(
        idea_description=project.idea_description,
        target_audience=project.target_audience,
        price_point=project.price_point,
        business_model=project.business_model,
    )

    try:
        prototype = save_generated_prototype(db, project, generated)
    except InvalidStatusTransition as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create prototype",
        )

    print(f"✅ [PROTOTYPE] Stored prototype {prototype.id} — source={generated.source}")
    record = prototype_to_record(prototype)
    return GeneratePrototypeResponse(**record.model_dump(), project_status=project.status)


@router.post(
    "/{project_id}/repo",
    response_model=RepoProvisionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create GitHub Repository",
)
async def create_repo(
    project_id: int,
    payload: RepoCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RepoProvisionResponse:
    """Create a repository with the caller's GitHub account and link it to the project."""
    try:
        credential = require_credential(current_user)
    except GitHubNotConnectedError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    project = _owned_or_404(db, project_id, current_user)

    result = await provision_repository(db, project, credential, payload)

    if result.outcome is ProvisioningOutcome.FAILED:
        if result.failed_stage is ProvisioningStage.CREATE_REPOSITORY:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
        if result.compensated:
            logger.error("Repository for project %s was created, not linked, then deleted", project.id)
        else:
            logger.error(
                "Repository for project %s was created but not linked and could not be deleted; "
                "manual cleanup required",
                project.id,
            )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to link repository to project",
        )

    if result.outcome is ProvisioningOutcome.DEGRADED:
        message = (
            "Repository created, but some files could not be committed: "
            + ", ".join(result.failed_files)
        )
    else:
        message = "Repository created successfully"

    return RepoProvisionResponse(
        repo_url=result.repo_url,
        repo_name=result.repo_name,
        outcome=result.outcome.value,
        committed_files=result.committed_files,
        failed_files=result.failed_files,
        message=message,
    )
