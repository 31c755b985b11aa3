"""Abstract interface to a remote git object store."""

from abc import ABC, abstractmethod

from gitdata.objects.models import Commit, Reference, Sha, Tree


class GitDataStore(ABC):
    """Read and write git objects in a hosted repository.

    Reads take an optional token for private repositories; writes require one.
    Operations returning ``X | None`` yield None when the object could not be
    fetched or decoded, unless the store is configured to raise.
    """

    @abstractmethod
    async def read_blob(
        self, owner: str, repo: str, sha: str, token: str | None = None
    ) -> bytes:
        """Fetch a blob and return its decoded bytes.

        Raises:
            NotFoundError: the blob could not be fetched.
            DecodeError: the blob content is not valid for its encoding.
        """
        ...

    @abstractmethod
    async def write_blob(
        self, token: str, owner: str, repo: str, data: bytes
    ) -> Sha | None:
        """Create a blob from raw bytes; returns the server-assigned sha."""
        ...

    @abstractmethod
    async def read_tree(
        self, owner: str, repo: str, sha: str, token: str | None = None
    ) -> Tree | None: ...

    @abstractmethod
    async def write_tree(
        self, token: str, owner: str, repo: str, tree: Tree
    ) -> Tree | None:
        """Create a tree. Leave ``tree.sha`` empty to let the server assign it."""
        ...

    @abstractmethod
    async def read_commit(
        self, owner: str, repo: str, sha: str, token: str | None = None
    ) -> Commit | None: ...

    @abstractmethod
    async def write_commit(
        self, token: str, owner: str, repo: str, commit: Commit
    ) -> Commit | None: ...

    @abstractmethod
    async def get_ref(
        self, owner: str, repo: str, ref: str, token: str | None = None
    ) -> Reference | None:
        """Fetch one reference by fully-qualified path (``refs/heads/main``)."""
        ...

    @abstractmethod
    async def get_all_refs(
        self, owner: str, repo: str, namespace: str, token: str | None = None
    ) -> list[Reference] | None:
        """List references under a namespace (``refs/heads``)."""
        ...

    @abstractmethod
    async def create_ref(
        self, token: str, owner: str, repo: str, reference: Reference
    ) -> Reference | None: ...

    @abstractmethod
    async def update_ref(
        self, token: str, owner: str, repo: str, ref: str, sha: Sha
    ) -> Reference | None:
        """Point ``ref`` at ``sha``. Always a force update."""
        ...

    @abstractmethod
    async def delete_ref(self, token: str, owner: str, repo: str, ref: str) -> None:
        """Delete a reference. Not supported; implementations must raise."""
        ...
