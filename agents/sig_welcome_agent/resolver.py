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

import base64
import binascii
from dataclasses import dataclass
import logging
import re
from typing import Callable
from typing import Iterable
from typing import Sequence

from sig_welcome_agent.collaborators import Collaborator
from sig_welcome_agent.collaborators import fallback_maintainers
from sig_welcome_agent.errors import DecodeError
from sig_welcome_agent.errors import FetchError
from sig_welcome_agent.errors import ParseError
from sig_welcome_agent.errors import ResolutionError
from sig_welcome_agent.patterns import matches
from sig_welcome_agent.relations import RelationDocument
from sig_welcome_agent.relations import parse_relations
from sig_welcome_agent.roster import parse_sig_info

logger = logging.getLogger(__name__)

# (org, repo, path, branch) -> base64 content, "" when the path is missing.
PathContentFetcher = Callable[[str, str, str, str], str]
# (org, repo) -> collaborators of the repository.
CollaboratorsFetcher = Callable[[str, str], list[Collaborator]]
# (org, repo, number) -> paths changed by the pull request.
ChangedPathsFetcher = Callable[[str, str, int], list[str]]


@dataclass(frozen=True)
class ResolutionConfig:
    simplified_welcome: bool = False
    relation_file_path: str = ""
    relation_file_branch: str = "master"
    sig_owners_path_template: str = "sig/{sig}/OWNERS"
    sig_info_path_template: str = "sig/{sig}/sig-info.yaml"
    sig_files_branch: str = "master"


@dataclass(frozen=True)
class Owners:
    maintainers: tuple[str, ...] = ()
    committers: tuple[str, ...] = ()

    @property
    def has_committers(self) -> bool:
        return bool(self.committers)


@dataclass(frozen=True)
class Outcome:
    """What one resolution strategy produced.

    Exactly one of three shapes: a resolved owner set, no result (try the
    next strategy), or a failure. Recoverable failures let the next strategy
    run; the others end the resolution.
    """

    owners: Owners | None = None
    error: Exception | None = None
    recoverable: bool = True

    @classmethod
    def resolved(cls, maintainers: Iterable[str], committers: Iterable[str] = ()) -> "Outcome":
        return cls(owners=Owners(tuple(maintainers), tuple(committers)))

    @classmethod
    def no_result(cls) -> "Outcome":
        return cls()

    @classmethod
    def failed(cls, error: Exception, recoverable: bool) -> "Outcome":
        return cls(error=error, recoverable=recoverable)


@dataclass
class ResolutionRequest:
    org: str
    repo: str
    sig: str
    cfg: ResolutionConfig
    fetch_collaborators: CollaboratorsFetcher
    fetch_path_content: PathContentFetcher
    fetch_changed_paths: ChangedPathsFetcher | None = None
    number: int = 0
    changed_paths: Sequence[str] | None = None

    def fetch(self, path: str, branch: str) -> str:
        return self.fetch_path_content(self.org, self.repo, path, branch)


def decode_content(content: str) -> bytes:
    """Decode base64 file content as returned by the contents API."""
    try:
        return base64.b64decode("".join(content.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"cannot decode file content: {e}") from e


def owners_for_paths(changed_paths: Iterable[str], document: RelationDocument) -> set[str]:
    owners = set()
    for changed in changed_paths:
        for rule in document.rules:
            if any(matches(changed, pattern) for pattern in rule.paths):
                owners.update(rule.owners)
    return owners


def path_targeted_strategy(request: ResolutionRequest) -> Outcome:
    """Owners of the files touched by a pull request, from the relation file."""
    cfg = request.cfg
    if not cfg.simplified_welcome or request.number <= 0:
        return Outcome.no_result()

    try:
        changed_paths = request.changed_paths
        if changed_paths is None:
            if request.fetch_changed_paths is None:
                return Outcome.no_result()
            changed_paths = request.fetch_changed_paths(
                request.org, request.repo, request.number
            )
        if not changed_paths:
            return Outcome.no_result()

        content = request.fetch(cfg.relation_file_path, cfg.relation_file_branch)
        document = parse_relations(decode_content(content))
        owners = owners_for_paths(changed_paths, document)
    except (FetchError, DecodeError, ParseError) as e:
        logger.warning(
            "Path-targeted owners unavailable for %s/%s#%d: %s",
            request.org,
            request.repo,
            request.number,
            e,
        )
        return Outcome.failed(e, recoverable=True)

    if not owners:
        return Outcome.no_result()
    return Outcome.resolved(sorted(owners))


def roster_strategy(request: ResolutionRequest) -> Outcome:
    """SIG roster owners, or repository collaborators when the SIG has no roster."""
    cfg = request.cfg
    try:
        collaborators = request.fetch_collaborators(request.org, request.repo)
    except FetchError as e:
        return Outcome.failed(e, recoverable=False)
    baseline = sorted(fallback_maintainers(collaborators))

    branch = cfg.sig_files_branch
    for template in (cfg.sig_owners_path_template, cfg.sig_info_path_template):
        path = template.format(sig=request.sig)
        try:
            content = request.fetch(path, branch)
        except FetchError as e:
            logger.info("Falling back to collaborators, %s unavailable: %s", path, e)
            return Outcome.resolved(baseline)
        if not content:
            logger.info("Falling back to collaborators, %s is empty", path)
            return Outcome.resolved(baseline)

    try:
        roster = parse_sig_info(decode_content(content))
    except (DecodeError, ParseError) as e:
        return Outcome.failed(e, recoverable=False)
    return Outcome.resolved(sorted(roster.maintainers), sorted(roster.committers))


STRATEGIES = (path_targeted_strategy, roster_strategy)


def resolve_owners(
    org: str,
    repo: str,
    sig: str,
    cfg: ResolutionConfig,
    *,
    fetch_collaborators: CollaboratorsFetcher,
    fetch_path_content: PathContentFetcher,
    fetch_changed_paths: ChangedPathsFetcher | None = None,
    number: int = 0,
    changed_paths: Sequence[str] | None = None,
    strategies=STRATEGIES,
) -> Owners:
    """Resolve who should be contacted about a new issue or pull request.

    Strategies run in order and the first one producing owners wins:
    path-targeted owners from the relation file (pull requests only, when
    simplified welcome is enabled), then the SIG roster with the repository
    collaborators as fallback.

    Args:
      org: organization owning the repository.
      repo: repository name.
      sig: SIG the repository belongs to.
      cfg: resolution settings for this repository.
      fetch_collaborators: returns the collaborators of a repository.
      fetch_path_content: returns base64 content of a file, "" if missing.
      fetch_changed_paths: returns the files changed by a pull request.
      number: pull request number, 0 for issues.
      changed_paths: already known changed files, skips fetch_changed_paths.
      strategies: ordered resolution strategies.

    Returns:
      The maintainers and committers to notify. Committers are empty when the
      owners came from the relation file.

    Raises:
      ResolutionError: a strategy failed without a fallback, or none of
        them produced owners.
    """
    request = ResolutionRequest(
        org=org,
        repo=repo,
        sig=sig,
        cfg=cfg,
        fetch_collaborators=fetch_collaborators,
        fetch_path_content=fetch_path_content,
        fetch_changed_paths=fetch_changed_paths,
        number=number,
        changed_paths=changed_paths,
    )

    for strategy in strategies:
        outcome = strategy(request)
        if outcome.owners is not None:
            return outcome.owners
        if outcome.error is not None and not outcome.recoverable:
            raise ResolutionError(
                f"cannot resolve owners of {org}/{repo}: {outcome.error}"
            ) from outcome.error

    raise ResolutionError(f"no owners found for {org}/{repo}")


def find_sig_of_repo(org: str, repo: str, tree_paths: Iterable[str]) -> str:
    """Find the SIG listing the repository in the community tree.

    A SIG owns a repository when the tree holds
    `sig/<sig>/<org>/<initial>/<repo>.yaml` or `sig/<sig>/<org>/<repo>.yaml`.
    Returns "" when no SIG lists it.
    """
    pattern = re.compile(
        r"^sig/(?P<sig>[^/]+)/{org}/(?:[^/]+/)?{repo}\.ya?ml$".format(
            org=re.escape(org), repo=re.escape(repo)
        )
    )
    for path in tree_paths:
        m = pattern.match(path)
        if m:
            return m.group("sig")
    return ""
