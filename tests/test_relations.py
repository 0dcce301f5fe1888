import pytest

from sig_welcome_agent.errors import ParseError
from sig_welcome_agent.relations import OwnershipRule
from sig_welcome_agent.relations import parse_relations

RELATIONS = b"""
relations:
  - path:
      - docs/*/README
      - docs/api
    owner:
      - gitee_id: alice
        name: Alice
      - github_id: bob
  - path:
      - src/kernel
    owner:
      - gitee_id: carol
"""


def test_parse_relations_keeps_rule_order():
    document = parse_relations(RELATIONS)
    assert document.rules == (
        OwnershipRule(paths=("docs/*/README", "docs/api"), owners=("alice", "bob")),
        OwnershipRule(paths=("src/kernel",), owners=("carol",)),
    )


@pytest.mark.parametrize("raw", [b"", b"   \n", b"relations:\n", b"relations: []\n"])
def test_empty_input_gives_empty_document(raw):
    assert parse_relations(raw).rules == ()


def test_owner_without_identity_is_skipped():
    document = parse_relations(b"relations:\n  - path: [a]\n    owner:\n      - name: nobody\n")
    assert document.rules[0].owners == ()


@pytest.mark.parametrize(
    "raw",
    [
        b"relations: [\n  - path: [a",
        b"\x80\x81 not utf-8",
        b"- just\n- a list\n",
        b"relations: not-a-list\n",
        b"relations:\n  - plain string\n",
        b"relations:\n  - path: docs\n    owner: []\n",
    ],
)
def test_malformed_document_raises_parse_error(raw):
    with pytest.raises(ParseError):
        parse_relations(raw)


def test_bare_string_owners_are_kept_verbatim():
    document = parse_relations(b"relations:\n  - path: [a]\n    owner: [' alice', bob, '']\n")
    assert document.rules[0].owners == (" alice", "bob")
