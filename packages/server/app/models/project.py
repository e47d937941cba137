"""Project model: a GitHub repository suggested for contribution."""

from typing import Any, Callable, ClassVar, List, Optional, TYPE_CHECKING
import uuid

import sqlalchemy as sa
from dateutil.relativedelta import relativedelta
from sqlmodel import Field, Relationship, SQLModel

from app.integrations.github import GithubClient, GithubClientProtocol
from app.integrations.popularity import PopularityScorer
from prhub_shared.schemas.projects import github_repository

from .base import TimestampMixin, UUIDMixin, _utcnow
from .label import Label, ProjectLabel

if TYPE_CHECKING:
    from .user import User

DEFAULT_BRANCH = "master"


def since_months_ago(months: int) -> str:
    """UTC ISO-8601 timestamp ``months`` calendar months before now."""
    return (_utcnow() - relativedelta(months=months)).strftime("%Y-%m-%dT%H:%M:%SZ")


class Project(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "projects"

    name: str = Field(nullable=False)
    description: str = Field(nullable=False)
    github_url: str = Field(nullable=False)
    main_language: str = Field(nullable=False)
    inactive: Optional[bool] = Field(default=None)  # None counts as active
    user_id: Optional[uuid.UUID] = Field(default=None, foreign_key="users.id", index=True)

    labels: List[Label] = Relationship(
        back_populates="projects",
        link_model=ProjectLabel,
        sa_relationship_kwargs={"lazy": "selectin"},
    )
    submitted_by: Optional["User"] = Relationship(back_populates="projects")

    # Swappable collaborators; called with (nickname, token[, project]).
    github_client_class: ClassVar[Callable[[str, str], GithubClientProtocol]] = GithubClient
    scorer_class: ClassVar[Callable[..., Any]] = PopularityScorer

    @property
    def github_repository(self) -> str:
        return github_repository(self.github_url)

    def deactivate(self) -> "Project":
        self.inactive = True
        return self

    def github_client(self, nickname: str, token: str) -> GithubClientProtocol:
        return type(self).github_client_class(nickname, token)

    def issues(self, nickname: str, token: str, months_ago: int = 6, options: Optional[dict] = None):
        """Issues opened or updated within the last ``months_ago`` months."""
        options = dict(options or {})
        options["since"] = since_months_ago(months_ago)
        return self.github_client(nickname, token).issues(self.github_repository, options)

    def commits(self, nickname: str, token: str, months_ago: int = 3, options: Optional[dict] = None):
        """Commits on the master branch within the last ``months_ago`` months."""
        options = dict(options or {})
        options["since"] = since_months_ago(months_ago)
        options["sha"] = DEFAULT_BRANCH
        return self.github_client(nickname, token).commits(self.github_repository, options)

    def repo(self, nickname: str, token: str):
        return self.github_client(nickname, token).repository(self.github_repository)

    def score(self, nickname: str, token: str):
        return type(self).scorer_class(nickname, token, self).score()


# Case-insensitive uniqueness; backs the application-level duplicate check.
sa.Index(
    "ix_projects_github_url_lower",
    sa.func.lower(Project.__table__.c.github_url),
    unique=True,
)
