"""Request paths for git data resources and reference update semantics.

Reference paths are appended verbatim after ``/git/``: callers pass a
fully-qualified ref (``refs/heads/main``) or namespace (``refs/tags``).
"""

from __future__ import annotations

from typing import Literal

ObjectKind = Literal["blobs", "trees", "commits", "refs"]

# update-ref always forces, so a branch can move to a non-descendant commit.
# Callers wanting fast-forward-only updates must check ancestry first.
FORCE_UPDATE_PARAMS: dict[str, str] = {"force": "true"}


def _repo_base(owner: str, repo: str) -> str:
    for label, value in (("owner", owner), ("repo", repo)):
        if not value or "/" in value:
            raise ValueError(f"Invalid {label} {value!r}")
    return f"/repos/{owner}/{repo}/git"


def object_path(owner: str, repo: str, kind: ObjectKind, sha: str | None = None) -> str:
    """Path of an object collection, or of one object when ``sha`` is given."""
    base = f"{_repo_base(owner, repo)}/{kind}"
    if sha is None:
        return base
    if not sha:
        raise ValueError("Object sha cannot be empty")
    return f"{base}/{sha}"


def ref_path(owner: str, repo: str, ref: str) -> str:
    """Path of a reference or reference namespace."""
    if not ref:
        raise ValueError("Reference path cannot be empty")
    if ref.startswith("/"):
        raise ValueError(f"Reference path must be relative, got {ref!r}")
    return f"{_repo_base(owner, repo)}/{ref}"


def branch_ref(name: str) -> str:
    """``main`` -> ``refs/heads/main``; qualified refs pass through."""
    return name if name.startswith("refs/") else f"refs/heads/{name}"


def tag_ref(name: str) -> str:
    """``v1.0`` -> ``refs/tags/v1.0``; qualified refs pass through."""
    return name if name.startswith("refs/") else f"refs/tags/{name}"
