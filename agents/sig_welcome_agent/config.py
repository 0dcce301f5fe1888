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

from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any

from sig_welcome_agent.resolver import ResolutionConfig
import yaml


@dataclass(frozen=True)
class BotConfig:
    """Welcome settings for one repository."""

    community_name: str = "openEuler"
    command_link: str = "https://gitee.com/openeuler/community/blob/master/en/sig-infrastructure/command.md"
    sig_link_template: str = "https://gitee.com/openeuler/community/tree/master/sig/{sig}"
    # Contact the owners of the changed files instead of the whole SIG.
    welcome_simpler: bool = False
    file_path: str = ""
    file_branch: str = "master"
    need_assign: bool = False
    sig_files_branch: str = "master"
    community_branch: str = "master"

    def resolution_config(self) -> ResolutionConfig:
        return ResolutionConfig(
            simplified_welcome=self.welcome_simpler and bool(self.file_path),
            relation_file_path=self.file_path,
            relation_file_branch=self.file_branch,
            sig_files_branch=self.sig_files_branch,
        )


_FIELD_NAMES = {f.name for f in fields(BotConfig)}


def _name_list(entry: dict[str, Any], key: str) -> list[str]:
    """Read a list of `org` / `org/repo` names; an empty key means no names."""
    names = entry.get(key) or []
    if not isinstance(names, list):
        raise ValueError(f"Bot config '{key}' must be a list, got {type(names).__name__}")
    return names


def _applies_to(entry: dict[str, Any], org: str, repo: str) -> int:
    """Rank how specifically a config entry targets a repository, 0 if not at all."""
    full_name = f"{org}/{repo}"
    if full_name in _name_list(entry, "excluded_repos"):
        return 0
    repos = _name_list(entry, "repos")
    if full_name in repos:
        return 2
    if org in repos:
        return 1
    return 0


def config_for(entries: list[dict[str, Any]], org: str, repo: str) -> BotConfig:
    """Pick the config entry for a repository.

    An `org/repo` entry wins over an `org` entry. Unknown keys are ignored.
    Without a matching entry the defaults apply.

    Raises:
      ValueError: an entry is not a mapping, or its repo lists are not lists.
    """
    best, best_rank = None, 0
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError("Bot config entries must be mappings")
        rank = _applies_to(entry, org, repo)
        if rank > best_rank:
            best, best_rank = entry, rank

    if best is None:
        return BotConfig()
    values = {k: v for k, v in best.items() if k in _FIELD_NAMES}
    return replace(BotConfig(), **values)


def load_bot_config(path: str | None, org: str, repo: str) -> BotConfig:
    if not path:
        return BotConfig()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Bot config {path} must be a mapping")
    items = data.get("config_items") or []
    if not isinstance(items, list):
        raise ValueError(f"Bot config {path}: 'config_items' must be a list")
    return config_for(items, org, repo)
