"""JSON wire encoding and decoding for git objects.

The remote API distinguishes an absent key from a key holding ``null`` or
``""``, so encoders omit conditional fields instead of emitting placeholders:

- ``Tree.sha`` only when non-empty
- ``Commit.committer`` only when present
- ``TreeEntry.size`` never (server-computed)
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ValidationError

from gitdata.errors import DecodeError, EncodeError
from gitdata.objects.models import (
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

M = TypeVar("M", bound=BaseModel)

BlobWriteEncoding = Literal["utf-8", "base64"]

# Keys the server always sends even though the model lets callers omit them.
_REQUIRED_ON_DECODE: dict[type[BaseModel], tuple[str, ...]] = {
    Tree: ("sha",),
}


def decode(model_cls: type[M], data: Any) -> M:
    """Decode one JSON object into ``model_cls``.

    Raises DecodeError if ``data`` is not an object or a required field is
    missing or mistyped. Optional fields take their model defaults.
    """
    name = model_cls.__name__
    if not isinstance(data, dict):
        raise DecodeError(
            f"decode {name}", f"expected a JSON object, got {type(data).__name__}"
        )
    missing = [k for k in _REQUIRED_ON_DECODE.get(model_cls, ()) if k not in data]
    if missing:
        raise DecodeError(f"decode {name}", f"missing field(s): {', '.join(missing)}")
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"decode {name}", str(e), cause=e) from e


def decode_list(model_cls: type[M], data: Any) -> list[M]:
    """Decode a JSON array of objects."""
    if not isinstance(data, list):
        raise DecodeError(
            f"decode list[{model_cls.__name__}]",
            f"expected a JSON array, got {type(data).__name__}",
        )
    return [decode(model_cls, item) for item in data]


def encode(value: BaseModel) -> dict[str, Any]:
    """Encode a git object into its JSON-ready wire form."""
    encoder = _ENCODERS.get(type(value))
    if encoder is None:
        raise EncodeError("encode", f"no wire form for {type(value).__name__}")
    return encoder(value)


def _encode_blob(blob: Blob) -> dict[str, Any]:
    return {
        "content": blob.content,
        "encoding": blob.encoding,
        "sha": blob.sha,
        "size": blob.size,
    }


def _encode_content(content: Content) -> dict[str, Any]:
    try:
        text = content.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodeError(
            "encode Content",
            "content is not valid UTF-8; upload it with base64 encoding",
            cause=e,
        ) from e
    return {"content": text, "encoding": content.encoding}


def _encode_sha(sha: Sha) -> dict[str, Any]:
    return {"sha": sha.sha}


def _encode_tree_entry(entry: TreeEntry) -> dict[str, Any]:
    return {
        "type": entry.type,
        "path": entry.path,
        "mode": entry.mode,
        "sha": entry.sha,
    }


def _encode_tree(tree: Tree) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if tree.has_sha:
        out["sha"] = tree.sha
    out["tree"] = [_encode_tree_entry(e) for e in tree.tree]
    return out


def _encode_signature(sig: Signature) -> dict[str, Any]:
    return {"date": sig.date, "name": sig.name, "email": sig.email}


def _encode_commit(commit: Commit) -> dict[str, Any]:
    out: dict[str, Any] = {
        "sha": commit.sha,
        "author": _encode_signature(commit.author),
        "message": commit.message,
        "tree": _encode_sha(commit.tree),
        "parents": [_encode_sha(p) for p in commit.parents],
    }
    if commit.committer is not None:
        out["committer"] = _encode_signature(commit.committer)
    return out


def _encode_object_ref(obj: ObjectRef) -> dict[str, Any]:
    return {"type": obj.type, "sha": obj.sha}


def _encode_reference(ref: Reference) -> dict[str, Any]:
    return {"ref": ref.ref, "object": _encode_object_ref(ref.object)}


_ENCODERS: dict[type, Any] = {
    Blob: _encode_blob,
    Content: _encode_content,
    Sha: _encode_sha,
    TreeEntry: _encode_tree_entry,
    Tree: _encode_tree,
    Signature: _encode_signature,
    Commit: _encode_commit,
    ObjectRef: _encode_object_ref,
    Reference: _encode_reference,
}


# ── Blob content ────────────────────────────────────────────────────


def decode_blob_content(blob: Blob) -> bytes:
    """Return the raw bytes carried by a fetched blob.

    Base64 content arrives wrapped across lines; the segments are joined
    before decoding.
    """
    if blob.encoding == "base64":
        joined = "".join(blob.content.splitlines())
        try:
            return base64.b64decode(joined, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(
                "decode blob content", f"invalid base64 in blob {blob.sha}", cause=e
            ) from e
    if blob.encoding == "utf-8":
        return blob.content.encode("utf-8")
    raise DecodeError(
        "decode blob content", f"unsupported blob encoding {blob.encoding!r}"
    )


def content_for_upload(
    data: bytes, encoding: BlobWriteEncoding = "utf-8"
) -> Content:
    """Build the blob-creation payload for ``data``.

    With ``"utf-8"`` the bytes go out as-is, tagged utf-8, although reads
    come back base64. ``"base64"`` encodes the bytes first and can carry
    binary data.
    """
    if encoding == "base64":
        return Content(content=base64.b64encode(data), encoding="base64")
    if encoding != "utf-8":
        raise EncodeError("encode Content", f"unsupported encoding {encoding!r}")
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodeError(
            "encode Content",
            "content is not valid UTF-8; upload it with base64 encoding",
            cause=e,
        ) from e
    return Content(content=data, encoding="utf-8")
