"""Typed client for the git data API: blobs, trees, commits and references."""

from gitdata.errors import (
    DecodeError,
    EncodeError,
    GitDataError,
    NotFoundError,
    TransportError,
    UnsupportedOperationError,
)
from gitdata.objects import (
    Blob,
    Commit,
    Content,
    ObjectRef,
    Reference,
    Sha,
    Signature,
    Tree,
    TreeEntry,
)
from gitdata.remote import GitDataStore, GitHubGitData, create_store

__all__ = [
    "Blob",
    "Commit",
    "Content",
    "DecodeError",
    "EncodeError",
    "GitDataError",
    "GitDataStore",
    "GitHubGitData",
    "NotFoundError",
    "ObjectRef",
    "Reference",
    "Sha",
    "Signature",
    "TransportError",
    "Tree",
    "TreeEntry",
    "UnsupportedOperationError",
    "create_store",
]
