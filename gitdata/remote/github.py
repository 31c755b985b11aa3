"""GitHub git data API implementation of GitDataStore."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from gitdata.errors import GitDataError, NotFoundError, UnsupportedOperationError
from gitdata.objects.codec import (
    BlobWriteEncoding,
    content_for_upload,
    decode,
    decode_blob_content,
    decode_list,
    encode,
)
from gitdata.objects.models import Blob, Commit, Reference, Sha, Tree
from gitdata.remote.base import GitDataStore
from gitdata.remote.refs import FORCE_UPDATE_PARAMS, object_path, ref_path
from gitdata.remote.transport import DEFAULT_BASE_URL, RestTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _auth_headers(token: str | None) -> dict[str, str] | None:
    return {"Authorization": f"token {token}"} if token else None


def _require_token(token: str, operation: str) -> dict[str, str]:
    if not token:
        raise ValueError(f"{operation} requires an access token")
    return {"Authorization": f"token {token}"}


class GitHubGitData(GitDataStore):
    """GitDataStore over the GitHub REST API.

    By default a failed lookup, HTTP error or undecodable response yields
    None and is logged. With ``strict=True`` the underlying NotFoundError,
    TransportError or DecodeError is raised so callers can tell them apart.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        user_agent: str = "gitdata",
        blob_write_encoding: BlobWriteEncoding = "utf-8",
        strict: bool = False,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._transport = RestTransport(
            base_url=base_url, timeout=timeout, user_agent=user_agent, client=client
        )
        self.blob_write_encoding = blob_write_encoding
        self.strict = strict

    async def __aenter__(self) -> GitHubGitData:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def _attempt(
        self, operation: str, call: Callable[[], Awaitable[T]]
    ) -> T | None:
        """Run ``call``, collapsing failures to None unless strict."""
        try:
            return await call()
        except GitDataError as e:
            if self.strict:
                raise
            if isinstance(e, NotFoundError):
                logger.debug("%s: %s", operation, e)
            else:
                logger.warning("%s: %s", operation, e)
            return None

    async def _get(
        self, operation: str, path: str, token: str | None
    ) -> Any:
        return await self._transport.get_json(
            path, operation=operation, headers=_auth_headers(token)
        )

    # ── Blobs ───────────────────────────────────────────────────────

    async def read_blob(
        self, owner: str, repo: str, sha: str, token: str | None = None
    ) -> bytes:
        path = object_path(owner, repo, "blobs", sha)
        try:
            blob = decode(Blob, await self._get("read_blob", path, token))
        except GitDataError as e:
            if self.strict:
                raise
            logger.debug("read_blob %s: %s", sha, e)
            raise NotFoundError("read_blob", "Blob not found") from e
        return decode_blob_content(blob)

    async def write_blob(
        self, token: str, owner: str, repo: str, data: bytes
    ) -> Sha | None:
        headers = _require_token(token, "write_blob")
        body = encode(content_for_upload(data, self.blob_write_encoding))
        path = object_path(owner, repo, "blobs")

        async def _send() -> Sha:
            resp = await self._transport.send_json(
                "POST", path, body, operation="write_blob", headers=headers
            )
            return decode(Sha, resp)

        return await self._attempt("write_blob", _send)

    # ── Trees ───────────────────────────────────────────────────────

    async def read_tree(
        self, owner: str, repo: str, sha: str, token: str | None = None
    ) -> Tree | None:
        path = object_path(owner, repo, "trees", sha)

        async def _fetch() -> Tree:
            return decode(Tree, await self._get("read_tree", path, token))

        return await self._attempt("read_tree", _fetch)

    async def write_tree(
        self, token: str, owner: str, repo: str, tree: Tree
    ) -> Tree | None:
        headers = _require_token(token, "write_tree")
        body = encode(tree)
        path = object_path(owner, repo, "trees")

        async def _send() -> Tree:
            resp = await self._transport.send_json(
                "POST", path, body, operation="write_tree", headers=headers
            )
            return decode(Tree, resp)

        return await self._attempt("write_tree", _send)

    # ── Commits ─────────────────────────────────────────────────────

    async def read_commit(
        self, owner: str, repo: str, sha: str, token: str | None = None
    ) -> Commit | None:
        path = object_path(owner, repo, "commits", sha)

        async def _fetch() -> Commit:
            return decode(Commit, await self._get("read_commit", path, token))

        return await self._attempt("read_commit", _fetch)

    async def write_commit(
        self, token: str, owner: str, repo: str, commit: Commit
    ) -> Commit | None:
        headers = _require_token(token, "write_commit")
        body = encode(commit)
        path = object_path(owner, repo, "commits")

        async def _send() -> Commit:
            resp = await self._transport.send_json(
                "POST", path, body, operation="write_commit", headers=headers
            )
            return decode(Commit, resp)

        return await self._attempt("write_commit", _send)

    # ── References ──────────────────────────────────────────────────

    async def get_ref(
        self, owner: str, repo: str, ref: str, token: str | None = None
    ) -> Reference | None:
        path = ref_path(owner, repo, ref)

        async def _fetch() -> Reference:
            return decode(Reference, await self._get("get_ref", path, token))

        return await self._attempt("get_ref", _fetch)

    async def get_all_refs(
        self, owner: str, repo: str, namespace: str, token: str | None = None
    ) -> list[Reference] | None:
        path = ref_path(owner, repo, namespace)

        async def _fetch() -> list[Reference]:
            return decode_list(Reference, await self._get("get_all_refs", path, token))

        return await self._attempt("get_all_refs", _fetch)

    async def create_ref(
        self, token: str, owner: str, repo: str, reference: Reference
    ) -> Reference | None:
        headers = _require_token(token, "create_ref")
        body = encode(reference)
        path = object_path(owner, repo, "refs")

        async def _send() -> Reference:
            resp = await self._transport.send_json(
                "POST", path, body, operation="create_ref", headers=headers
            )
            return decode(Reference, resp)

        return await self._attempt("create_ref", _send)

    async def update_ref(
        self, token: str, owner: str, repo: str, ref: str, sha: Sha
    ) -> Reference | None:
        headers = _require_token(token, "update_ref")
        body = encode(sha)
        path = ref_path(owner, repo, ref)

        async def _send() -> Reference:
            resp = await self._transport.send_json(
                "PATCH",
                path,
                body,
                operation="update_ref",
                headers=headers,
                params=FORCE_UPDATE_PARAMS,
            )
            return decode(Reference, resp)

        return await self._attempt("update_ref", _send)

    async def delete_ref(self, token: str, owner: str, repo: str, ref: str) -> None:
        raise UnsupportedOperationError("delete_ref", "deleting references is not supported")
