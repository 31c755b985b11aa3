"""Shared test fixtures for gitdata."""

import json

import httpx
import pytest

from gitdata.config.models import GitDataConfig
from gitdata.objects.models import (
    Commit,
    ObjectRef,
    Reference,
    Sha,
    Signature,
    Tree,
    TreeEntry,
)
from gitdata.remote.github import GitHubGitData

BASE_URL = "https://api.github.com"


class FakeGitHub:
    """Canned responses keyed by (method, path); records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: object = None) -> None:
        self.routes[(method, path)] = httpx.Response(status, json=body)

    def add_raw(self, method: str, path: str, status: int, content: bytes) -> None:
        self.routes[(method, path)] = httpx.Response(status, content=content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.routes.get(
            (request.method, request.url.path),
            httpx.Response(404, json={"message": "Not Found"}),
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last.content)


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def make_store(fake_github):
    """Build a GitHubGitData wired to the fake server."""

    def _make(**kwargs) -> GitHubGitData:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(fake_github.handler), base_url=BASE_URL
        )
        return GitHubGitData(BASE_URL, client=client, **kwargs)

    return _make


@pytest.fixture
def sample_signature():
    return Signature(
        date="2012-12-26T10:00:00Z", name="Ada Lovelace", email="ada@example.com"
    )


@pytest.fixture
def sample_tree():
    return Tree(
        sha="d2ce27a394f9fa8ce5a83fb52405a2701feeadd3",
        tree=[
            TreeEntry(type="blob", path="README.md", mode="100644", size=120, sha="aa11"),
            TreeEntry(type="tree", path="src", mode="040000", sha="bb22"),
        ],
    )


@pytest.fixture
def sample_commit(sample_signature):
    return Commit(
        sha="a3f4494be204612f7bd526d65cd8db587e32c46d",
        author=sample_signature,
        committer=sample_signature,
        message="Initial import",
        tree=Sha(sha="d2ce27a394f9fa8ce5a83fb52405a2701feeadd3"),
        parents=[Sha(sha="1111"), Sha(sha="2222")],
    )


@pytest.fixture
def sample_reference():
    return Reference(
        ref="refs/heads/main", object=ObjectRef(type="commit", sha="deadbeef")
    )


@pytest.fixture
def sample_config():
    return GitDataConfig()
