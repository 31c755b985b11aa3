"""Pydantic models for git objects as exposed by the git data API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictInt

# Tree entry modes (octal strings, as the API spells them)
MODE_FILE = "100644"
MODE_EXECUTABLE = "100755"
MODE_SYMLINK = "120000"
MODE_TREE = "040000"
MODE_SUBMODULE = "160000"


class Blob(BaseModel):
    """Raw file content as returned by the server.

    ``content`` is the wire text; with ``encoding == "base64"`` it is base64
    split across lines. Use ``codec.decode_blob_content`` to get bytes.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    encoding: str
    sha: str
    size: StrictInt


class Content(BaseModel):
    """Outbound payload for blob creation."""

    model_config = ConfigDict(frozen=True)

    content: bytes = b""
    encoding: str = "utf-8"


class Sha(BaseModel):
    """Bare pointer to an object."""

    model_config = ConfigDict(frozen=True)

    sha: str


class TreeEntry(BaseModel):
    """One path in a tree. ``size`` is server-computed; -1 when unknown."""

    model_config = ConfigDict(frozen=True)

    type: str
    path: str
    mode: str
    size: StrictInt = -1
    sha: str


class Tree(BaseModel):
    """Directory listing. ``sha`` is None (or empty) until the server assigns one."""

    model_config = ConfigDict(frozen=True)

    sha: str | None = None
    tree: list[TreeEntry]

    @property
    def has_sha(self) -> bool:
        return bool(self.sha)


class Signature(BaseModel):
    """Author or committer identity."""

    model_config = ConfigDict(frozen=True)

    date: str
    name: str
    email: str


class Commit(BaseModel):
    model_config = ConfigDict(frozen=True)

    sha: str
    author: Signature
    committer: Signature | None = None
    message: str
    tree: Sha
    parents: list[Sha]

    @property
    def tree_sha(self) -> str:
        return self.tree.sha

    @property
    def parent_shas(self) -> list[str]:
        return [p.sha for p in self.parents]


class ObjectRef(BaseModel):
    """Typed pointer to any git object."""

    model_config = ConfigDict(frozen=True)

    type: str
    sha: str


class Reference(BaseModel):
    """Named pointer, e.g. ``refs/heads/main``."""

    model_config = ConfigDict(frozen=True)

    ref: str
    object: ObjectRef
