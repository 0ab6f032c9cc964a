"""Tests for tracking comment helpers."""

from unittest.mock import MagicMock

from themepreview_core.gh.comments import (
    build_comment_body,
    create_replace_comment,
    find_issue_comment,
    hidden_comment_marker,
    retrieve_theme_id,
)

MARKER = "Shopify Theme Actions for :mystore.myshopify.com"


def _comment(body, comment_id=1):
    c = MagicMock()
    c.body = body
    c.id = comment_id
    return c


def _repo_with_comments(comments):
    repo = MagicMock()
    repo.get_issue.return_value.get_comments.return_value = comments
    return repo


class TestHiddenCommentMarker:
    def test_includes_store_url(self):
        assert hidden_comment_marker("mystore.myshopify.com") == MARKER

    def test_differs_per_store(self):
        assert hidden_comment_marker("a.myshopify.com") != hidden_comment_marker("b.myshopify.com")


class TestRetrieveThemeId:
    def test_reads_versioned_marker(self):
        body = build_comment_body(":tada: preview", MARKER, 12345)
        assert retrieve_theme_id(body) == 12345

    def test_falls_back_to_preview_url(self):
        body = f":tada: 'mystore.myshopify.com' preview at: \n <https://mystore.myshopify.com?preview_theme_id=12345>\n<!-- {MARKER} -->"
        assert retrieve_theme_id(body) == 12345

    def test_versioned_marker_wins_over_url(self):
        body = "<https://s?preview_theme_id=1>\n<!-- themepreview:v1 theme-id=2 -->"
        assert retrieve_theme_id(body) == 2

    def test_returns_none_without_id(self):
        assert retrieve_theme_id(f"<!-- {MARKER} -->") is None

    def test_handles_none_body(self):
        assert retrieve_theme_id(None) is None


class TestFindIssueComment:
    def test_returns_none_when_no_comments(self):
        assert find_issue_comment(_repo_with_comments([]), 3, MARKER) is None

    def test_returns_first_matching_comment(self):
        match = _comment(f"hello\n<!-- {MARKER} -->", comment_id=2)
        repo = _repo_with_comments([_comment("LGTM"), match, _comment(f"<!-- {MARKER} -->", 3)])
        assert find_issue_comment(repo, 3, MARKER) is match
        repo.get_issue.assert_called_once_with(3)

    def test_ignores_other_store_marker(self):
        other = _comment("<!-- Shopify Theme Actions for :other.myshopify.com -->")
        assert find_issue_comment(_repo_with_comments([other]), 3, MARKER) is None

    def test_store_url_prefix_does_not_match_longer_store(self):
        au_comment = _comment(build_comment_body("au preview", hidden_comment_marker("shop.example.com.au"), 1))
        repo = _repo_with_comments([au_comment])
        assert find_issue_comment(repo, 1, hidden_comment_marker("shop.example.com")) is None
        assert find_issue_comment(repo, 1, hidden_comment_marker("shop.example.com.au")) is au_comment

    def test_handles_none_body(self):
        assert find_issue_comment(_repo_with_comments([_comment(None)]), 3, MARKER) is None


class TestCreateReplaceComment:
    def test_creates_when_absent(self):
        repo = _repo_with_comments([])
        create_replace_comment(repo, 3, "msg", MARKER, 99)
        issue = repo.get_issue.return_value
        issue.create_comment.assert_called_once()
        body = issue.create_comment.call_args.args[0]
        assert body.startswith("msg")
        assert f"<!-- {MARKER} -->" in body
        assert retrieve_theme_id(body) == 99

    def test_edits_existing_in_place(self):
        existing = _comment(f"old\n<!-- {MARKER} -->")
        repo = _repo_with_comments([existing])
        result = create_replace_comment(repo, 3, "new", MARKER, 7)
        assert result is existing
        existing.edit.assert_called_once()
        assert existing.edit.call_args.args[0].startswith("new")
        repo.get_issue.return_value.create_comment.assert_not_called()
