"""
Profile stores: point lookups of ``(tenant_id, use_demo)`` by user id.

Two execution contexts read the same ``profiles`` row:

- ``SqlProfileStore`` runs on the server's own database session.
- ``RestProfileStore`` goes through the backend REST data API with the
  caller's access token, so the data store's row-level policies apply
  exactly as they would for the signed-in browser.

Both raise ``ProfileLookupError`` for anything that is not a clean answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Profile
from shared.utils.exceptions import ProfileLookupError


@dataclass(frozen=True)
class ProfileRecord:
    """The two profile columns tenant resolution needs."""

    tenant_id: Optional[str]
    use_demo: bool


class ProfileStore(Protocol):
    def get_profile(self, user_id: str) -> Optional[ProfileRecord]: ...


class AsyncProfileStore(Protocol):
    async def get_profile(self, user_id: str) -> Optional[ProfileRecord]: ...


class SqlProfileStore:
    """Profile lookups through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        try:
            row = self.db.execute(
                select(Profile.tenant_id, Profile.use_demo).where(Profile.id == user_id)
            ).first()
        except SQLAlchemyError as exc:
            raise ProfileLookupError(f"profile query failed: {exc.__class__.__name__}") from exc

        if row is None:
            return None
        return ProfileRecord(tenant_id=row.tenant_id, use_demo=bool(row.use_demo))


class RestProfileStore:
    """
    Profile lookups through the backend REST data API, as the caller.

    The shared ``httpx.AsyncClient`` comes from the application context;
    the access token is per request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        rest_url: str,
        api_key: str,
        access_token: str,
        timeout: float = 5.0,
    ):
        self.client = client
        self.rest_url = rest_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout

    async def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        try:
            response = await self.client.get(
                f"{self.rest_url}/profiles",
                params={
                    "select": "tenant_id,use_demo",
                    "id": f"eq.{user_id}",
                    "limit": "1",
                },
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.access_token}",
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPError as exc:
            raise ProfileLookupError(f"profile request failed: {exc.__class__.__name__}") from exc
        except ValueError as exc:
            raise ProfileLookupError("profile response is not JSON") from exc

        if not isinstance(rows, list):
            raise ProfileLookupError("profile response is not a list")
        if not rows:
            return None

        row = rows[0]
        if not isinstance(row, dict):
            raise ProfileLookupError("profile row is not an object")
        return ProfileRecord(
            tenant_id=row.get("tenant_id"),
            use_demo=bool(row.get("use_demo")),
        )
