"""Remote git data stores."""

import os

from gitdata.config.models import ApiConfig
from gitdata.remote.base import GitDataStore
from gitdata.remote.github import GitHubGitData
from gitdata.remote.refs import (
    FORCE_UPDATE_PARAMS,
    branch_ref,
    object_path,
    ref_path,
    tag_ref,
)
from gitdata.remote.transport import RestTransport


def create_store(config: ApiConfig) -> GitHubGitData:
    """Create a git data store from API config."""
    return GitHubGitData(
        config.base_url,
        timeout=config.timeout,
        user_agent=config.user_agent,
        blob_write_encoding=config.blob_write_encoding,
        strict=config.strict,
    )


def resolve_token(config: ApiConfig, explicit: str | None = None) -> str:
    """Return ``explicit`` if given, else the token from the env var in config.token_env."""
    token = explicit or os.environ.get(config.token_env, "")
    if not token:
        raise ValueError(
            f"Access token not found. Pass --token or set the {config.token_env} environment variable."
        )
    return token


__all__ = [
    "FORCE_UPDATE_PARAMS",
    "GitDataStore",
    "GitHubGitData",
    "RestTransport",
    "branch_ref",
    "create_store",
    "object_path",
    "ref_path",
    "resolve_token",
    "tag_ref",
]
