"""Boilerplate documentation committed into a newly provisioned repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..agents.prototype_agent.templates import format_price
from ..models.project import Project


@dataclass(frozen=True)
class RepoFile:
    path: str
    content: str

    @property
    def commit_message(self) -> str:
        return f"Add {self.path}"


_GITIGNORE = """# Dependencies
node_modules/

# Environment variables
.env
.env.local

# Build output
dist/
build/

# IDE
.vscode/
.idea/

# OS
.DS_Store
Thumbs.db
"""


def _readme(project: Project) -> str:
    return f"""# {project.idea_description}

## Project Overview

**Business Model:** {project.business_model}
**Target Audience:** {project.target_audience}
**Price Point:** ${format_price(project.price_point)}

## MVP Validation

This repository contains the MVP validation project created through MVP Validator.

## Getting Started

1. Clone this repository
2. Review the project documentation
3. Start building your MVP

## Next Steps

- [ ] Set up development environment
- [ ] Create basic project structure
- [ ] Implement core features
- [ ] Deploy and test
"""


def _project_brief(project: Project) -> str:
    created = project.created_at.isoformat() if project.created_at else "unknown"
    return f"""# Project Brief

## Idea Description
{project.idea_description}

## Target Audience
{project.target_audience}

## Business Model
{project.business_model}

## Price Point
${format_price(project.price_point)}

## Status
{project.status}

## Created
{created}
"""


def build_repo_files(project: Project) -> List[RepoFile]:
    """The three fixed files, in commit order."""
    return [
        RepoFile("README.md", _readme(project)),
        RepoFile("docs/project-brief.md", _project_brief(project)),
        RepoFile(".gitignore", _GITIGNORE),
    ]
