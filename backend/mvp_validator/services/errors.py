"""Domain errors raised by services and translated to HTTP by the routes."""


class ProjectNotFoundError(Exception):
    """Project does not exist or is not owned by the caller (never distinguished)."""


class PersistenceError(Exception):
    """A database write failed and the operation was rolled back."""


class GitHubNotConnectedError(Exception):
    """The caller has no stored GitHub credential."""
