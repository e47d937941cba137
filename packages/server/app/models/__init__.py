# Table models, imported so create_all sees every table.
from .base import UUIDMixin, TimestampMixin  # noqa: F401
from .user import User  # noqa: F401
from .label import Label, ProjectLabel  # noqa: F401
from .project import Project  # noqa: F401
