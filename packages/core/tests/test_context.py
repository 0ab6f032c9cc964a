"""Tests for run context and theme name derivation."""

import json

import pytest

from themepreview_core.context import RunContext, get_theme_name
from themepreview_core.errors import ConfigurationError


class TestGetThemeName:
    def test_push_uses_last_segment_of_ref_name(self):
        ctx = RunContext(event_name="push", ref_name="refs/heads/feature/foo")
        assert get_theme_name(ctx) == "foo"

    def test_ref_without_slash_returned_unchanged(self):
        ctx = RunContext(event_name="push", ref_name="main")
        assert get_theme_name(ctx) == "main"

    def test_pull_request_uses_head_ref_and_ignores_ref_name(self):
        ctx = RunContext(event_name="pull_request", head_ref="abc", ref_name="42/merge")
        assert get_theme_name(ctx) == "abc"

    def test_pull_request_head_ref_with_slashes(self):
        ctx = RunContext(event_name="pull_request", head_ref="user/fix/header-logo")
        assert get_theme_name(ctx) == "header-logo"

    def test_missing_head_ref_on_pull_request_raises(self):
        ctx = RunContext(event_name="pull_request", ref_name="main")
        with pytest.raises(ConfigurationError, match="GITHUB_HEAD_REF"):
            get_theme_name(ctx)

    def test_missing_ref_name_raises(self):
        with pytest.raises(ConfigurationError, match="GITHUB_REF_NAME"):
            get_theme_name(RunContext(event_name="push"))


class TestRunContextFromEnv:
    def test_reads_pull_request_number_from_event_payload(self, tmp_path):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"pull_request": {"number": 17}}))
        ctx = RunContext.from_env(
            {
                "GITHUB_EVENT_NAME": "pull_request",
                "GITHUB_HEAD_REF": "feature/x",
                "GITHUB_REF_NAME": "17/merge",
                "GITHUB_REPOSITORY": "owner/repo",
                "GITHUB_EVENT_PATH": str(event),
            }
        )
        assert ctx.pull_request_number == 17
        assert ctx.is_pull_request
        assert ctx.repository == "owner/repo"
        assert ctx.head_ref == "feature/x"

    def test_push_payload_has_no_pull_request(self, tmp_path):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"ref": "refs/heads/main"}))
        ctx = RunContext.from_env({"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(event)})
        assert ctx.pull_request_number is None
        assert not ctx.is_pull_request

    def test_missing_payload_file_means_no_pull_request(self, tmp_path):
        ctx = RunContext.from_env({"GITHUB_EVENT_PATH": str(tmp_path / "missing.json")})
        assert ctx.pull_request_number is None

    def test_empty_environment(self):
        ctx = RunContext.from_env({})
        assert ctx == RunContext()
