from .project_service import create_project, get_owned_project, list_projects, save_generated_prototype
from .project_status import InvalidStatusTransition, ProjectStatus, advance_status
from .repo_provisioning import ProvisioningOutcome, ProvisioningResult, provision_repository
from .user_service import GitHubCredential, connect_github, disconnect_github, get_or_create_user

__all__ = [
    "create_project",
    "list_projects",
    "get_owned_project",
    "save_generated_prototype",
    "ProjectStatus",
    "InvalidStatusTransition",
    "advance_status",
    "GitHubCredential",
    "get_or_create_user",
    "connect_github",
    "disconnect_github",
    "ProvisioningOutcome",
    "ProvisioningResult",
    "provision_repository",
]
