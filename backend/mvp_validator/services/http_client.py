"""
Outbound HTTP configuration

Timeout presets for each external collaborator. Every adapter opens its own
``httpx.AsyncClient`` per operation and passes the preset for its service;
no retries are configured anywhere.
"""

import httpx


# Timeout configurations (in seconds)
class Timeouts:
    """Timeout presets for external services."""
    GITHUB = 15.0          # repo creation + contents API
    GITHUB_OAUTH = 10.0    # code exchange at github.com
    IDENTITY = 8.0         # users-service session checks

    CONNECT = 5.0


def get_timeout(service: str) -> httpx.Timeout:
    """Get timeout configuration for a service."""
    timeouts = {
        "github": Timeouts.GITHUB,
        "github_oauth": Timeouts.GITHUB_OAUTH,
        "identity": Timeouts.IDENTITY,
    }
    seconds = timeouts.get(service.lower(), 10.0)
    return httpx.Timeout(seconds, connect=Timeouts.CONNECT)
