# Schemas package
from .auth_schema import CurrentUserResponse, Identity, RedirectUrlResponse, SessionExchangeRequest
from .github_schema import RepoCreateRequest, RepoProvisionResponse
from .project_schema import NewProjectInput, ProjectDetailResponse, ProjectListResponse, ProjectRecord
from .prototype_schema import GeneratePrototypeResponse, PrototypeRecord

__all__ = [
    "Identity",
    "SessionExchangeRequest",
    "RedirectUrlResponse",
    "CurrentUserResponse",
    "NewProjectInput",
    "ProjectRecord",
    "ProjectDetailResponse",
    "ProjectListResponse",
    "PrototypeRecord",
    "GeneratePrototypeResponse",
    "RepoCreateRequest",
    "RepoProvisionResponse",
]
