import pytest

from sig_welcome_agent.errors import ParseError
from sig_welcome_agent.patterns import matches


def test_literal_pattern_matches_as_substring():
    assert matches("sig/storage/OWNERS", "sig/storage")
    assert matches("community/sig/storage/OWNERS", "storage/OWNERS")
    assert not matches("sig/storage/OWNERS", "sig/network")


def test_wildcard_segment_requires_a_segment():
    assert matches("docs/apiserver/README", "docs/*/README")
    assert matches("docs/zh/guide/README.md", "docs/*/README")
    assert not matches("docs/README", "docs/*/README")


def test_wildcard_segment_does_not_cross_whitespace():
    assert not matches("docs/api server/README", "docs/*/README")


def test_invalid_pattern_raises_parse_error():
    with pytest.raises(ParseError):
        matches("src/lib/file.c", "src/*/[unclosed")
