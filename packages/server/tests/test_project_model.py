"""
Unit tests for the Project entity's own behaviour (no database).

Tests cover:
- github_repository property
- deactivate() state transition
- issues/commits/repo/score delegation to swappable collaborators
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.models import project as project_module
from app.models.project import Project, since_months_ago

FROZEN_NOW = datetime(2026, 8, 31, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_now(monkeypatch):
    monkeypatch.setattr(project_module, "_utcnow", lambda: FROZEN_NOW)
    return FROZEN_NOW


@pytest.fixture
def project(project_attrs):
    return Project(**project_attrs(github_url="https://github.com/rails/rails/"))


@pytest.fixture
def github_calls(monkeypatch):
    """Replace the GitHub client with a recorder; returns the call log."""
    calls: list[tuple] = []

    class RecordingClient:
        def __init__(self, nickname, token):
            self.nickname = nickname
            self.token = token

        async def issues(self, repository, options):
            calls.append(("issues", self.nickname, self.token, repository, options))
            return [{"number": 1}]

        async def commits(self, repository, options):
            calls.append(("commits", self.nickname, self.token, repository, options))
            return [{"sha": "abc"}]

        async def repository(self, repository):
            calls.append(("repository", self.nickname, self.token, repository))
            return {"full_name": repository}

    monkeypatch.setattr(Project, "github_client_class", RecordingClient)
    return calls


class TestProjectEntity:
    def test_github_repository(self, project):
        assert project.github_repository == "rails/rails"

    def test_new_project_is_active(self, project):
        assert project.inactive is None

    def test_deactivate_is_idempotent(self, project):
        project.deactivate()
        assert project.inactive is True
        project.deactivate()
        assert project.inactive is True


class TestSinceMonthsAgo:
    def test_calendar_months_clamp_to_month_end(self, frozen_now):
        assert since_months_ago(6) == "2026-02-28T12:00:00Z"

    def test_three_months(self, frozen_now):
        assert since_months_ago(3) == "2026-05-31T12:00:00Z"

    def test_zero_months_is_now(self, frozen_now):
        assert since_months_ago(0) == "2026-08-31T12:00:00Z"


class TestDelegation:
    @pytest.mark.asyncio
    async def test_issues_default_window(self, project, github_calls, frozen_now):
        result = await project.issues("octocat", "tkn")
        assert result == [{"number": 1}]
        assert github_calls == [
            ("issues", "octocat", "tkn", "rails/rails", {"since": "2026-02-28T12:00:00Z"})
        ]

    @pytest.mark.asyncio
    async def test_issues_merges_options_without_mutating(self, project, github_calls, frozen_now):
        options = {"state": "open"}
        await project.issues("octocat", "tkn", 1, options)
        assert options == {"state": "open"}
        assert github_calls[0][4] == {"state": "open", "since": "2026-07-31T12:00:00Z"}

    @pytest.mark.asyncio
    async def test_commits_default_window_on_master(self, project, github_calls, frozen_now):
        result = await project.commits("octocat", "tkn")
        assert result == [{"sha": "abc"}]
        assert github_calls == [
            (
                "commits",
                "octocat",
                "tkn",
                "rails/rails",
                {"since": "2026-05-31T12:00:00Z", "sha": "master"},
            )
        ]

    @pytest.mark.asyncio
    async def test_commits_overrides_caller_sha(self, project, github_calls, frozen_now):
        await project.commits("octocat", "tkn", 3, {"sha": "develop", "per_page": 10})
        assert github_calls[0][4]["sha"] == "master"
        assert github_calls[0][4]["per_page"] == 10

    @pytest.mark.asyncio
    async def test_repo(self, project, github_calls):
        result = await project.repo("octocat", "tkn")
        assert result == {"full_name": "rails/rails"}
        assert github_calls == [("repository", "octocat", "tkn", "rails/rails")]

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self, project, monkeypatch):
        class FailingClient:
            def __init__(self, nickname, token):
                pass

            async def repository(self, repository):
                raise RuntimeError("GitHub is down")

        monkeypatch.setattr(Project, "github_client_class", FailingClient)
        with pytest.raises(RuntimeError, match="GitHub is down"):
            await project.repo("octocat", "tkn")

    def test_score_delegates_to_scorer(self, project, monkeypatch):
        seen = []

        class StubScorer:
            def __init__(self, nickname, token, scored_project):
                seen.append((nickname, token, scored_project))

            def score(self):
                return 42

        monkeypatch.setattr(Project, "scorer_class", StubScorer)
        assert project.score("octocat", "tkn") == 42
        assert seen == [("octocat", "tkn", project)]
