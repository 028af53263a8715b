"""Factory for selecting the appropriate FileSource implementation.

Exposes get_file_source which returns either a LocalSource or a
GitHubSource bound to a session context and the shared resolver.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from clients.github import GitHubClient
from core.errors import ValidationError
from core.interfaces import FileSource
from core.models import SessionContext, SourceType
from core.resolver import ListingResolver
from sources.github_source import GitHubSource
from sources.local_source import LocalSource


def get_file_source(
    source: Optional[SourceType] = None,
    *,
    project_root: Path,
    context: Optional[SessionContext] = None,
    github_client: Optional[GitHubClient] = None,
    resolver: Optional[ListingResolver] = None,
) -> FileSource:
    """
    Factory that returns the correct FileSource implementation.

    - "github" (the default) needs a session context, a client and a resolver.
    - "local" reads the checkout under project_root.
    """

    if source is None or source == "github":
        if context is None:
            raise ValidationError("Missing repository context for github source")
        if github_client is None or resolver is None:
            raise ValidationError("GitHub source requires a client and a resolver")
        return GitHubSource(client=github_client, resolver=resolver, context=context)

    if source == "local":
        return LocalSource(project_root=project_root)

    raise ValidationError(f"Unknown source: {source}")
