"""Store-backed member lookups (implements IMemberRepository)."""

from __future__ import annotations

from app.application.interfaces.store import IDocumentStore
from app.core.constants import COLLECTION_MEMBERS


class MemberRepository:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get_role(self, member_id: str) -> str | None:
        doc = await self._store.get(COLLECTION_MEMBERS, member_id)
        if doc is None:
            return None
        role = doc.data.get("role")
        return role if isinstance(role, str) else None
