"""Git object model and its JSON wire codec."""

from gitdata.objects.codec import (
    content_for_upload,
    decode,
    decode_blob_content,
    decode_list,
    encode,
)
from gitdata.objects.models import (
    MODE_EXECUTABLE,
    MODE_FILE,
    MODE_SUBMODULE,
    MODE_SYMLINK,
    MODE_TREE,
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

__all__ = [
    "Blob",
    "Commit",
    "Content",
    "MODE_EXECUTABLE",
    "MODE_FILE",
    "MODE_SUBMODULE",
    "MODE_SYMLINK",
    "MODE_TREE",
    "ObjectRef",
    "Reference",
    "Sha",
    "Signature",
    "Tree",
    "TreeEntry",
    "content_for_upload",
    "decode",
    "decode_blob_content",
    "decode_list",
    "encode",
]
