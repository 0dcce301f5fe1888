import base64
import os

import pytest

# settings refuses to import without a token.
os.environ.setdefault("GITHUB_TOKEN", "test-token")

from sig_welcome_agent.errors import FetchError  # noqa: E402


def encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FakeRepository:
    """In-memory stand-in for the GitHub content and collaborator endpoints."""

    def __init__(self, files=None, collaborators=None, changes=None, tree=None):
        self.files = files or {}
        self.collaborators = collaborators or []
        self.changes = changes or []
        self.tree = tree or []
        self.failing = set()
        self.calls = []

    def get_path_content(self, org, repo, path, branch):
        self.calls.append(("content", path, branch))
        if path in self.failing:
            raise FetchError(f"cannot fetch {path}")
        return self.files.get(path, "")

    def list_collaborators(self, org, repo):
        self.calls.append(("collaborators",))
        if "collaborators" in self.failing:
            raise FetchError("cannot list collaborators")
        return list(self.collaborators)

    def get_pull_request_changes(self, org, repo, number):
        self.calls.append(("changes", number))
        if "changes" in self.failing:
            raise FetchError("cannot list changes")
        return list(self.changes)

    def get_directory_tree(self, org, repo, branch):
        self.calls.append(("tree", branch))
        if "tree" in self.failing:
            raise FetchError("cannot list tree")
        return list(self.tree)

    def fetched_paths(self):
        return [c[1] for c in self.calls if c[0] == "content"]


@pytest.fixture
def fake_repo():
    return FakeRepository()
