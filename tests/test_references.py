"""Tests for issue reference parsing."""

import pytest
from pydantic import ValidationError

from verify_linked_issue.references import (
    DEFAULT_HOSTS,
    IssueReference,
    parse_references,
    server_hosts,
    strip_code,
)


def numbers(body: str | None) -> list[int]:
    return [ref.issue_number for ref in parse_references(body)]


class TestParseReferences:
    """Test parse_references grammar."""

    @pytest.mark.parametrize("body", [None, "", "See discussion", "no refs here"])
    def test_no_references(self, body: str | None) -> None:
        assert parse_references(body) == []

    def test_plain_hash_reference(self) -> None:
        refs = parse_references("Related to #42")
        assert len(refs) == 1
        assert refs[0].issue_number == 42
        assert refs[0].slug is None
        assert refs[0].action is None
        assert refs[0].raw == "#42"

    @pytest.mark.parametrize(
        "body,keyword",
        [
            ("Fixes #42", "Fixes"),
            ("closes #42", "closes"),
            ("Resolved: #42", "Resolved"),
            ("FIX #42", "FIX"),
        ],
    )
    def test_closing_keywords(self, body: str, keyword: str) -> None:
        refs = parse_references(body)
        assert [r.issue_number for r in refs] == [42]
        assert refs[0].action == keyword
        assert refs[0].raw == body

    def test_keyword_inside_word_is_not_an_action(self) -> None:
        refs = parse_references("prefixes #7")
        assert refs[0].action is None
        assert refs[0].raw == "#7"

    def test_gh_prefix(self) -> None:
        assert numbers("see GH-12 and gh-13") == [12, 13]

    def test_cross_repository_reference(self) -> None:
        refs = parse_references("Fixes octo-org/octo.repo#9")
        assert refs[0].slug == "octo-org/octo.repo"
        assert refs[0].issue_number == 9
        assert refs[0].target("me", "mine") == ("octo-org", "octo.repo")

    def test_issue_and_pull_urls(self) -> None:
        body = (
            "https://github.com/a/b/issues/5 and "
            "https://github.com/c/d/pull/6#issuecomment-1"
        )
        refs = parse_references(body)
        assert [(r.slug, r.issue_number) for r in refs] == [("a/b", 5), ("c/d", 6)]

    def test_other_hosts_need_to_be_enabled(self) -> None:
        body = "https://git.example.com/a/b/issues/5"
        assert parse_references(body) == []
        refs = parse_references(body, hosts=("git.example.com",))
        assert refs[0].slug == "a/b"

    def test_order_of_first_appearance(self) -> None:
        assert numbers("#3 then a/b#1 then #2") == [3, 1, 2]
        assert [r.index for r in parse_references("#3 #2")] == [0, 3]

    def test_duplicates_are_dropped(self) -> None:
        refs = parse_references("#4, fixes #4, A/B#4 and a/b#4")
        assert [(r.slug, r.issue_number) for r in refs] == [(None, 4), ("A/B", 4)]

    @pytest.mark.parametrize(
        "body",
        ["abc#1", "#1abc", "#0", "issue#12", "a/b/c#1", "`#1`", "<!-- #1 -->"],
    )
    def test_not_references(self, body: str) -> None:
        assert parse_references(body) == []

    def test_code_blocks_are_ignored(self) -> None:
        body = "```\nFixes #1\n```\nInline `#2` but really #3\n~~~\n#4\n~~~"
        assert numbers(body) == [3]

    def test_unterminated_code_block_hides_rest(self) -> None:
        assert numbers("#1\n```python\n# see #2") == [1]

    def test_multi_backtick_inline_code_is_ignored(self) -> None:
        assert numbers("Use `` #2 `` or ``a`#3`` but see #4") == [4]

    def test_unmatched_backtick_does_not_hide_references(self) -> None:
        assert numbers("a stray ` then #5") == [5]

    def test_markdown_list(self) -> None:
        body = "## Related\n- #10\n- (#11)\n* [#12]\n"
        assert numbers(body) == [10, 11, 12]


class TestServerHosts:
    """Test hosts derived from the server URL."""

    @pytest.mark.parametrize("server_url", [None, "", "not a url"])
    def test_defaults_to_github(self, server_url: str | None) -> None:
        assert server_hosts(server_url) == DEFAULT_HOSTS

    def test_enterprise_server(self) -> None:
        hosts = server_hosts("https://GHE.example.com/")
        assert hosts == ("ghe.example.com",)
        refs = parse_references("https://ghe.example.com/a/b/issues/5", hosts=hosts)
        assert [(r.slug, r.issue_number) for r in refs] == [("a/b", 5)]


class TestStripCode:
    """Test code stripping keeps offsets."""

    def test_keeps_length(self) -> None:
        body = "a `b` c ```d``` e"
        stripped = strip_code(body)
        assert len(stripped) == len(body)
        assert stripped.startswith("a ")
        assert "b" not in stripped and "d" not in stripped


class TestIssueReference:
    """Test IssueReference model."""

    def test_target_defaults_to_current_repository(self) -> None:
        ref = IssueReference(issue_number=1, raw="#1")
        assert ref.target("owner", "repo") == ("owner", "repo")
        assert str(ref) == "#1"

    def test_str_with_slug(self) -> None:
        ref = IssueReference(issue_number=2, slug="o/r", raw="o/r#2")
        assert str(ref) == "o/r#2"

    def test_rejects_non_positive_numbers(self) -> None:
        with pytest.raises(ValidationError):
            IssueReference(issue_number=0, raw="#0")

    def test_is_frozen(self) -> None:
        ref = IssueReference(issue_number=1, raw="#1")
        with pytest.raises(ValidationError):
            ref.issue_number = 2  # type: ignore[misc]
