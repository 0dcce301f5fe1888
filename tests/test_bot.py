import pytest

from conftest import FakeRepository
from conftest import encode
from sig_welcome_agent.bot import WelcomeBot
from sig_welcome_agent.bot import WelcomeEvent
from sig_welcome_agent.bot import format_welcome
from sig_welcome_agent.collaborators import Collaborator
from sig_welcome_agent.config import BotConfig
from sig_welcome_agent.errors import FetchError
from sig_welcome_agent.errors import MultipleErrors
from sig_welcome_agent.errors import ResolutionError
from sig_welcome_agent.resolver import Owners

TREE = ["sig/storage/openeuler/i/iSulad.yaml"]


class StubGitHubClient(FakeRepository):
    def __init__(self, labels=None, merged=3, **kwargs):
        super().__init__(**kwargs)
        self.labels = labels or []
        self.merged = merged
        self.comments = []
        self.added_labels = []
        self.created_labels = []
        self.assigned = []

    def count_merged_pull_requests(self, org, author):
        return self.merged

    def create_comment(self, org, repo, number, body):
        if "comment" in self.failing:
            raise FetchError("comment failed")
        self.comments.append((number, body))

    def add_labels(self, org, repo, number, labels):
        if "label" in self.failing:
            raise FetchError("label failed")
        self.added_labels.extend(labels)

    def get_repo_labels(self, org, repo):
        return list(self.labels)

    def create_repo_label(self, org, repo, name, color="ededed"):
        if "create_label" in self.failing:
            raise FetchError("create label failed")
        self.created_labels.append(name)
        self.labels.append(name)

    def assign_pull_request(self, org, repo, number, assignees):
        self.assigned.extend(assignees)


def make_client(**kwargs):
    files = {
        "sig/storage/OWNERS": encode("x"),
        "sig/storage/sig-info.yaml": encode(
            "maintainers:\n  - gitee_id: bob\ncommitters:\n  - gitee_id: carol\n"
        ),
    }
    files.update(kwargs.pop("files", {}))
    kwargs.setdefault("tree", TREE)
    kwargs.setdefault("collaborators", [Collaborator("alice", 40)])
    return StubGitHubClient(files=files, **kwargs)


def pr_event(**kwargs):
    values = dict(kind="pull_request", org="openeuler", repo="iSulad", number=5, author="dan")
    values.update(kwargs)
    return WelcomeEvent(**values)


def test_pull_request_gets_comment_and_sig_label():
    client = make_client()
    result = WelcomeBot(client, BotConfig()).handle(pr_event())

    assert result["status"] == "success"
    assert result["label"] == "sig/storage"
    assert client.created_labels == ["sig/storage"]
    assert client.added_labels == ["sig/storage"]
    number, body = client.comments[0]
    assert number == 5
    assert "***dan***" in body
    assert "any of the maintainers: @bob" in body
    assert "any of the committers: @carol" in body


def test_existing_label_is_not_recreated():
    client = make_client(labels=["sig/storage"])
    WelcomeBot(client, BotConfig()).handle(pr_event())
    assert client.created_labels == []
    assert client.added_labels == ["sig/storage"]


def test_newcomer_label_for_first_pull_request():
    client = make_client(merged=0)
    WelcomeBot(client, BotConfig()).handle(pr_event())
    assert client.added_labels == ["newcomer", "sig/storage"]


def test_issue_is_not_checked_for_newcomer():
    client = make_client(merged=0)
    WelcomeBot(client, BotConfig()).handle(pr_event(kind="issues"))
    assert client.added_labels == ["sig/storage"]


def test_non_opened_action_is_skipped():
    client = make_client()
    result = WelcomeBot(client, BotConfig()).handle(pr_event(action="closed"))
    assert result["status"] == "skipped"
    assert client.calls == []


def test_unknown_sig_aborts_without_comment_or_label():
    client = make_client(tree=["sig/storage/openeuler/o/other.yaml"])
    with pytest.raises(ResolutionError):
        WelcomeBot(client, BotConfig()).handle(pr_event())
    assert client.comments == []
    assert client.added_labels == []


def test_collaborator_failure_aborts_without_comment():
    client = make_client()
    client.failing.add("collaborators")
    with pytest.raises(ResolutionError):
        WelcomeBot(client, BotConfig()).handle(pr_event())
    assert client.comments == []


def test_label_creation_failure_is_only_logged():
    client = make_client()
    client.failing.add("create_label")
    result = WelcomeBot(client, BotConfig()).handle(pr_event())
    assert result["status"] == "success"
    assert client.added_labels == ["sig/storage"]


def test_comment_and_label_failures_are_collected():
    client = make_client()
    client.failing.update({"comment", "label"})
    with pytest.raises(MultipleErrors) as excinfo:
        WelcomeBot(client, BotConfig()).handle(pr_event())
    assert len(excinfo.value.errors) == 2


def test_need_assign_assigns_maintainers():
    client = make_client()
    WelcomeBot(client, BotConfig(need_assign=True)).handle(pr_event())
    assert client.assigned == ["bob"]


def test_simplified_welcome_names_only_maintainers():
    relations = "relations:\n  - path: [src/*/main.c]\n    owner:\n      - gitee_id: erin\n"
    client = make_client(files={"relations.yaml": encode(relations)}, changes=["src/core/main.c"])
    cfg = BotConfig(welcome_simpler=True, file_path="relations.yaml")
    WelcomeBot(client, cfg).handle(pr_event())
    body = client.comments[0][1]
    assert "any of the maintainers: @erin" in body
    assert "committers" not in body


def test_format_welcome_joins_mentions():
    owners = Owners(maintainers=("a", "b"), committers=())
    body = format_welcome("dan", "storage", owners, BotConfig(community_name="Demo"))
    assert "welcome to the Demo Community" in body
    assert "[storage](https://gitee.com/openeuler/community/tree/master/sig/storage)" in body
    assert body.endswith("any of the maintainers: @a , @b")
