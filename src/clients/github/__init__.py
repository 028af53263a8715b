from .client import GitHubClient, TreeResponse

__all__ = ["GitHubClient", "TreeResponse"]
