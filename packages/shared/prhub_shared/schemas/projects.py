import re
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from .common import Pagination
from .labels import LabelRead
from .languages import is_language

DESCRIPTION_MIN_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 200

REQUIRED_FIELDS = ("description", "github_url", "name", "main_language")

BLANK_MESSAGE = "can't be blank"
GITHUB_URL_MESSAGE = "Enter a valid GitHub URL."
DUPLICATE_URL_MESSAGE = "Project has already been suggested."
LANGUAGE_MESSAGE = "must be a programming language"

GITHUB_URL_PATTERN = re.compile(
    r"^https?://(www\.)?github\.com/[\w-]+/[\w.-]+/?\Z",
    re.IGNORECASE | re.ASCII,
)

_REPOSITORY_PREFIX = re.compile(
    r"^(((https|http|git)?://(www\.)?)|git@)github\.com(:|/)", re.IGNORECASE
)
_REPOSITORY_SUFFIX = re.compile(r"(\.git|/)$", re.IGNORECASE)


class ProjectBase(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    github_url: Optional[str] = None
    main_language: Optional[str] = None


class LabelAttributes(BaseModel):
    id: Optional[UUID] = None
    name: Optional[str] = None


class ProjectCreate(ProjectBase):
    user_id: Optional[UUID] = None
    labels_attributes: List[LabelAttributes] = Field(default_factory=list)

    def label_ids(self) -> list[UUID]:
        """Ids of the nested labels to attach; entries without an id are dropped."""
        return [attrs.id for attrs in self.labels_attributes if attrs.id is not None]


class ProjectUpdate(ProjectBase):
    pass


class ProjectRead(BaseModel):
    id: UUID
    name: str
    description: str
    github_url: str
    github_repository: str
    main_language: str
    inactive: Optional[bool] = None
    user_id: Optional[UUID] = None
    labels: List[LabelRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectPage(BaseModel):
    data: List[ProjectRead]
    pagination: Pagination


def github_repository(url: str) -> str:
    """Reduce a GitHub URL (https, http, git or ssh form) to its ``owner/repo`` slug.

    A bare slug is returned unchanged.
    """
    slug = _REPOSITORY_PREFIX.sub("", url)
    return _REPOSITORY_SUFFIX.sub("", slug)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_project(attrs: Mapping[str, Any]) -> Dict[str, List[str]]:
    """Check project attributes that need no storage lookup.

    Returns a mapping of field name to error messages; empty when valid.
    Blank fields only report the blank error.
    """
    errors: Dict[str, List[str]] = {}

    for field in REQUIRED_FIELDS:
        if _is_blank(attrs.get(field)):
            errors.setdefault(field, []).append(BLANK_MESSAGE)

    github_url = attrs.get("github_url")
    if "github_url" not in errors and not GITHUB_URL_PATTERN.match(str(github_url)):
        errors.setdefault("github_url", []).append(GITHUB_URL_MESSAGE)

    description = attrs.get("description")
    if "description" not in errors:
        length = len(str(description))
        if length < DESCRIPTION_MIN_LENGTH:
            errors.setdefault("description", []).append(
                f"is too short (minimum is {DESCRIPTION_MIN_LENGTH} characters)"
            )
        elif length > DESCRIPTION_MAX_LENGTH:
            errors.setdefault("description", []).append(
                f"is too long (maximum is {DESCRIPTION_MAX_LENGTH} characters)"
            )

    if "main_language" not in errors and not is_language(attrs.get("main_language")):
        errors.setdefault("main_language", []).append(LANGUAGE_MESSAGE)

    return errors
