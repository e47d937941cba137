from typing import Optional
from pydantic import BaseModel

# Fixed page size for project listings
PER_PAGE = 20


class Pagination(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class ErrorBody(BaseModel):
    code: str
    message: str
    status: int
    fields: Optional[dict[str, list[str]]] = None


class APIResponse(BaseModel):
    data: Optional[object] = None
    error: Optional[ErrorBody] = None
