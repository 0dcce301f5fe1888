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
import logging
from typing import Any

from sig_welcome_agent.config import BotConfig
from sig_welcome_agent.errors import FetchError
from sig_welcome_agent.errors import ResolutionError
from sig_welcome_agent.errors import raise_if_any
from sig_welcome_agent.resolver import Owners
from sig_welcome_agent.resolver import find_sig_of_repo
from sig_welcome_agent.resolver import resolve_owners

logger = logging.getLogger(__name__)

ACTION_OPENED = "opened"
PULL_REQUEST = "pull_request"
ISSUE = "issues"
NEWCOMER_LABEL = "newcomer"

WELCOME_MESSAGE = """
Hi ***{author}***, welcome to the {community} Community.
I'm the Bot here serving you. You can find the instructions on how to interact with me at **[Here]({command_link})**.
If you have any questions, please contact the SIG: [{sig}]({sig_link}), and any of the maintainers: {maintainers}"""

WELCOME_MESSAGE_WITH_COMMITTERS = WELCOME_MESSAGE + ", any of the committers: {committers}"


@dataclass(frozen=True)
class WelcomeEvent:
    kind: str
    org: str
    repo: str
    number: int
    author: str
    action: str = ACTION_OPENED

    @property
    def is_pull_request(self) -> bool:
        return self.kind == PULL_REQUEST


def mention(logins: tuple[str, ...] | list[str]) -> str:
    return " , ".join(f"@{login}" for login in logins)


def sig_label(sig: str) -> str:
    return f"sig/{sig}"


def format_welcome(author: str, sig: str, owners: Owners, cfg: BotConfig) -> str:
    """Render the welcome comment, naming committers only when there are some."""
    template = WELCOME_MESSAGE_WITH_COMMITTERS if owners.has_committers else WELCOME_MESSAGE
    return template.format(
        author=author,
        community=cfg.community_name,
        command_link=cfg.command_link,
        sig=sig,
        sig_link=cfg.sig_link_template.format(sig=sig),
        maintainers=mention(owners.maintainers),
        committers=mention(owners.committers),
    )


class WelcomeBot:
    """Greets the author of a new issue or pull request and labels it by SIG."""

    def __init__(self, client, cfg: BotConfig):
        self.client = client
        self.cfg = cfg

    def handle(self, event: WelcomeEvent) -> dict[str, Any]:
        """Welcome one event.

        Returns:
          The status of the event, with the SIG label and comment when
          successful.

        Raises:
          ResolutionError: no SIG or owners could be found. Nothing was
            posted.
          WelcomeError: commenting or labeling failed.
        """
        if event.action != ACTION_OPENED:
            print(f"Skipping '{event.action}' event for #{event.number}.")
            return {"status": "skipped", "action": event.action}

        errors: list[Exception] = []
        if event.is_pull_request:
            try:
                self.label_newcomer(event)
            except FetchError as e:
                errors.append(e)

        sig, owners = self.resolve(event)
        comment = format_welcome(event.author, sig, owners, self.cfg)

        if self.cfg.need_assign and event.is_pull_request and owners.maintainers:
            try:
                self.client.assign_pull_request(
                    event.org, event.repo, event.number, list(owners.maintainers)
                )
            except FetchError as e:
                errors.append(e)

        try:
            self.client.create_comment(event.org, event.repo, event.number, comment)
        except FetchError as e:
            errors.append(e)

        label = sig_label(sig)
        try:
            self.create_label_if_needed(event.org, event.repo, label)
        except FetchError as e:
            logger.error("create repo label: %s, err: %s", label, e)

        try:
            self.client.add_labels(event.org, event.repo, event.number, [label])
        except FetchError as e:
            errors.append(e)

        raise_if_any(errors)
        return {"status": "success", "sig": sig, "label": label, "comment": comment}

    def find_sig(self, org: str, repo: str) -> str:
        try:
            tree = self.client.get_directory_tree(org, repo, self.cfg.community_branch)
        except FetchError as e:
            raise ResolutionError(f"cant get sig name of repo: {org}/{repo}: {e}") from e

        sig = find_sig_of_repo(org, repo, tree)
        if not sig:
            raise ResolutionError(f"cant get sig name of repo: {org}/{repo}")
        return sig

    def resolve(self, event: WelcomeEvent) -> tuple[str, Owners]:
        sig = self.find_sig(event.org, event.repo)
        owners = resolve_owners(
            event.org,
            event.repo,
            sig,
            self.cfg.resolution_config(),
            fetch_collaborators=self.client.list_collaborators,
            fetch_path_content=self.client.get_path_content,
            fetch_changed_paths=self.client.get_pull_request_changes,
            number=event.number if event.is_pull_request else 0,
        )
        print(
            f"Resolved SIG '{sig}' for {event.org}/{event.repo}: "
            f"maintainers={list(owners.maintainers)}, committers={list(owners.committers)}"
        )
        return sig, owners

    def label_newcomer(self, event: WelcomeEvent) -> None:
        merged = self.client.count_merged_pull_requests(event.org, event.author)
        if merged == 0:
            self.client.add_labels(event.org, event.repo, event.number, [NEWCOMER_LABEL])

    def create_label_if_needed(self, org: str, repo: str, label: str) -> None:
        if label in self.client.get_repo_labels(org, repo):
            return
        self.client.create_repo_label(org, repo, label)
