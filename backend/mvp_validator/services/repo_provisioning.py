"""Repository provisioning for a project, as an explicit three-step saga.

  1. create the remote repository: failure ends the saga (FAILED)
  2. link repo url and full name on the project: failure triggers a
     best-effort delete of the new repo (FAILED)
  3. commit the boilerplate docs: each file is independent; failures are
     recorded, never raised (DEGRADED)

The caller's GitHub credential is passed in explicitly; nothing here reads
ambient per-user state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.project import Project
from ..schemas.github_schema import RepoCreateRequest
from .github_client import GitHubAPIError, GitHubClient
from .repo_docs import build_repo_files
from .user_service import GitHubCredential

logger = logging.getLogger(__name__)


class ProvisioningOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    DEGRADED = "degraded"   # repo created and linked, some docs missing
    FAILED = "failed"


class ProvisioningStage(str, Enum):
    CREATE_REPOSITORY = "create_repository"
    LINK_PROJECT = "link_project"
    COMMIT_DOCS = "commit_docs"


@dataclass
class ProvisioningResult:
    outcome: ProvisioningOutcome
    repo_url: Optional[str] = None
    repo_name: Optional[str] = None
    committed_files: List[str] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)
    error: Optional[str] = None
    failed_stage: Optional[ProvisioningStage] = None
    compensated: bool = False


def default_description(project: Project) -> str:
    return f"MVP validation project: {project.idea_description}"


async def _compensate(client: GitHubClient, full_name: str) -> bool:
    """Try to delete a repo that could not be linked. Returns True if deleted."""
    try:
        await client.delete_repository(full_name)
    except GitHubAPIError as exc:
        logger.warning("Could not delete unlinked repository %s: %s", full_name, exc.message)
        return False
    logger.info("Deleted unlinked repository %s", full_name)
    return True


async def provision_repository(
    db: Session,
    project: Project,
    credential: GitHubCredential,
    request: RepoCreateRequest,
    *,
    client: Optional[GitHubClient] = None,
) -> ProvisioningResult:
    """Create, link and seed a GitHub repository for *project*."""
    if project.user_id != credential.user_id:
        raise ValueError("GitHub credential does not belong to the project owner")

    client = client or GitHubClient(credential.access_token)
    print(f"🚀 [GITHUB] Provisioning repo '{request.name}' for project {project.id} as {credential.username}")

    # ── Step 1: create ────────────────────────────────────────
    try:
        repo = await client.create_repository(
            name=request.name,
            description=request.description or default_description(project),
            private=request.private,
        )
    except GitHubAPIError as exc:
        print(f"❌ [GITHUB] Repository creation FAILED: {exc.message}")
        return ProvisioningResult(
            outcome=ProvisioningOutcome.FAILED,
            error=exc.message,
            failed_stage=ProvisioningStage.CREATE_REPOSITORY,
        )

    # ── Step 2: link ──────────────────────────────────────────
    project.github_repo_url = repo.html_url
    project.github_repo_name = repo.full_name
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to link repository %s to project %s", repo.full_name, project.id)
        compensated = await _compensate(client, repo.full_name)
        return ProvisioningResult(
            outcome=ProvisioningOutcome.FAILED,
            error="Failed to link repository to project",
            failed_stage=ProvisioningStage.LINK_PROJECT,
            compensated=compensated,
        )
    db.refresh(project)

    # ── Step 3: seed docs (best-effort) ───────────────────────
    committed: List[str] = []
    failed: List[str] = []
    for repo_file in build_repo_files(project):
        try:
            # auto_init already committed README.md, so overwrites need its sha
            existing_sha = await client.get_file_sha(full_name=repo.full_name, path=repo_file.path)
            await client.put_file(
                full_name=repo.full_name,
                path=repo_file.path,
                content=repo_file.content,
                message=repo_file.commit_message,
                sha=existing_sha,
            )
        except GitHubAPIError as exc:
            logger.warning("Error creating file %s in %s: %s", repo_file.path, repo.full_name, exc.message)
            failed.append(repo_file.path)
            continue
        committed.append(repo_file.path)

    outcome = ProvisioningOutcome.SUCCEEDED if not failed else ProvisioningOutcome.DEGRADED
    print(f"✅ [GITHUB] Repo {repo.full_name} linked — outcome={outcome.value}, docs={len(committed)}/{len(committed) + len(failed)}")

    return ProvisioningResult(
        outcome=outcome,
        repo_url=repo.html_url,
        repo_name=repo.full_name,
        committed_files=committed,
        failed_files=failed,
        failed_stage=ProvisioningStage.COMMIT_DOCS if failed else None,
    )
