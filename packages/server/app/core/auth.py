"""
GitHub credentials carried on requests.

Calls that reach GitHub run as the requesting user: the GitHub login comes from
the ``X-GitHub-User`` header and the access token from ``Authorization``
(``token <value>`` or ``Bearer <value>``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException
from fastapi.security import APIKeyHeader

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)

TOKEN_SCHEMES = ("token", "bearer")


@dataclass(frozen=True)
class GithubCredentials:
    nickname: str
    token: str


def parse_authorization(value: str) -> str:
    """Extract the token from an Authorization header value.

    Raises ValueError on an unknown scheme or a missing token.
    """
    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() not in TOKEN_SCHEMES or not token.strip():
        raise ValueError("Expected 'token <value>' or 'Bearer <value>'")
    return token.strip()


async def optional_github_credentials(
    authorization: Optional[str] = Depends(api_key_header),
    x_github_user: Optional[str] = Header(default=None),
) -> Optional[GithubCredentials]:
    """Credentials when both headers are present, otherwise None."""
    if not authorization or not x_github_user:
        return None
    try:
        token = parse_authorization(authorization)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc))
    return GithubCredentials(nickname=x_github_user.strip(), token=token)


async def require_github_credentials(
    credentials: Optional[GithubCredentials] = Depends(optional_github_credentials),
) -> GithubCredentials:
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="GitHub credentials required (X-GitHub-User and Authorization headers)",
        )
    return credentials
