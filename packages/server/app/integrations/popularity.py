"""
Popularity scoring for suggested projects.

A project earns tiered points for stargazers, recently active issues and
recent commits on its default branch. Archived repositories score zero.
"""

from __future__ import annotations

from typing import Any, Protocol, TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from app.models.project import Project

log = structlog.get_logger()

# (minimum count, points), checked from the top
STAR_TIERS: tuple[tuple[int, int], ...] = ((1000, 5), (500, 4), (100, 3), (50, 2), (10, 1))
ISSUE_TIERS: tuple[tuple[int, int], ...] = ((50, 5), (25, 4), (10, 3), (5, 2), (1, 1))
COMMIT_TIERS: tuple[tuple[int, int], ...] = ((100, 5), (50, 4), (25, 3), (10, 2), (1, 1))

MAX_SCORE = sum(tiers[0][1] for tiers in (STAR_TIERS, ISSUE_TIERS, COMMIT_TIERS))


class ScorerProtocol(Protocol):
    def score(self) -> Any: ...


def tier_points(count: int, tiers: tuple[tuple[int, int], ...]) -> int:
    for minimum, points in tiers:
        if count >= minimum:
            return points
    return 0


class PopularityScorer:
    def __init__(self, nickname: str, token: str, project: "Project") -> None:
        self.nickname = nickname
        self.token = token
        self.project = project

    async def score(self) -> int:
        repository = await self.project.repo(self.nickname, self.token)
        if repository.get("archived"):
            log.info("project.scored", project_id=str(self.project.id), score=0, archived=True)
            return 0

        issues = await self.project.issues(self.nickname, self.token)
        commits = await self.project.commits(self.nickname, self.token)

        score = (
            tier_points(int(repository.get("stargazers_count") or 0), STAR_TIERS)
            + tier_points(len(issues), ISSUE_TIERS)
            + tier_points(len(commits), COMMIT_TIERS)
        )
        log.info("project.scored", project_id=str(self.project.id), score=score)
        return score
