# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import functools
from urllib.parse import quote

from sig_welcome_agent.collaborators import Collaborator
from sig_welcome_agent.collaborators import access_level_for
from sig_welcome_agent.errors import FetchError
from sig_welcome_agent.settings import GITHUB_BASE_URL
from sig_welcome_agent.utils import get_all_pages
from sig_welcome_agent.utils import get_request
from sig_welcome_agent.utils import is_not_found
from sig_welcome_agent.utils import post_request
import requests


def _fetch_errors(func):
    """Report request failures as FetchError once retries are exhausted."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"{func.__name__} failed: {e}") from e

    return wrapper


class GitHubClient:
    """The GitHub REST operations the welcome bot needs."""

    def __init__(self, base_url: str = GITHUB_BASE_URL):
        self.base_url = base_url.rstrip("/")

    def _repo_url(self, org: str, repo: str) -> str:
        return f"{self.base_url}/repos/{org}/{repo}"

    @_fetch_errors
    def get_path_content(self, org: str, repo: str, path: str, branch: str) -> str:
        """Base64 content of a file, or "" when the file does not exist."""
        url = f"{self._repo_url(org, repo)}/contents/{quote(path)}"
        try:
            data = get_request(url, {"ref": branch})
        except requests.exceptions.RequestException as e:
            if is_not_found(e):
                return ""
            raise
        if not isinstance(data, dict):
            # A directory listing, not a file.
            return ""
        return data.get("content") or ""

    @_fetch_errors
    def get_pull_request_changes(self, org: str, repo: str, number: int) -> list[str]:
        url = f"{self._repo_url(org, repo)}/pulls/{number}/files"
        return [f["filename"] for f in get_all_pages(url)]

    @_fetch_errors
    def list_collaborators(self, org: str, repo: str) -> list[Collaborator]:
        url = f"{self._repo_url(org, repo)}/collaborators"
        return [
            Collaborator(
                login=c["login"],
                access_level=access_level_for(c.get("permissions"), c.get("role_name")),
            )
            for c in get_all_pages(url)
        ]

    @_fetch_errors
    def get_directory_tree(self, org: str, repo: str, branch: str) -> list[str]:
        url = f"{self._repo_url(org, repo)}/git/trees/{quote(branch)}"
        data = get_request(url, {"recursive": 1})
        return [e["path"] for e in data.get("tree", []) if e.get("type") == "blob"]

    @_fetch_errors
    def create_comment(self, org: str, repo: str, number: int, body: str) -> None:
        print(f"Attempting to add comment to #{number} of {org}/{repo}")
        post_request(f"{self._repo_url(org, repo)}/issues/{number}/comments", {"body": body})

    @_fetch_errors
    def add_labels(self, org: str, repo: str, number: int, labels: list[str]) -> None:
        print(f"Attempting to add labels {labels} to #{number} of {org}/{repo}")
        post_request(f"{self._repo_url(org, repo)}/issues/{number}/labels", labels)

    @_fetch_errors
    def get_repo_labels(self, org: str, repo: str) -> list[str]:
        return [label["name"] for label in get_all_pages(f"{self._repo_url(org, repo)}/labels")]

    @_fetch_errors
    def create_repo_label(self, org: str, repo: str, name: str, color: str = "ededed") -> None:
        print(f"Creating label '{name}' in {org}/{repo}")
        post_request(f"{self._repo_url(org, repo)}/labels", {"name": name, "color": color})

    @_fetch_errors
    def assign_pull_request(self, org: str, repo: str, number: int, assignees: list[str]) -> None:
        print(f"Assigning {assignees} to #{number} of {org}/{repo}")
        post_request(
            f"{self._repo_url(org, repo)}/issues/{number}/assignees",
            {"assignees": assignees},
        )

    @_fetch_errors
    def count_merged_pull_requests(self, org: str, author: str) -> int:
        """Number of merged pull requests the author has in the organization."""
        query = f"type:pr is:merged org:{org} author:{author}"
        data = get_request(f"{self.base_url}/search/issues", {"q": query, "per_page": 1})
        return int(data.get("total_count", 0))
