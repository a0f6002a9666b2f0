"""Seed dev data from scripts/seed-data.json into Firestore.

Loads members, automation rules, points rules and workflows. Documents with an
"id" keep it; existing ids are skipped so the script can be re-run.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Requires: DATABASE_BACKEND=firestore and FIREBASE_SERVICE_ACCOUNT_KEY or
FIREBASE_SERVICE_ACCOUNT_PATH.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from app.application.interfaces.store import SERVER_TIMESTAMP
from app.core.constants import (
    COLLECTION_AUTOMATION_RULES,
    COLLECTION_MEMBERS,
    COLLECTION_POINTS_RULES,
    COLLECTION_WORKFLOWS,
)
from app.infrastructure.exceptions import DocumentExistsError
from app.infrastructure.firebase import (
    FirestoreDocumentStore,
    close_firebase,
    get_firestore_client,
    init_firebase,
)

_SECTIONS = {
    "members": COLLECTION_MEMBERS,
    "automation_rules": COLLECTION_AUTOMATION_RULES,
    "points_rules": COLLECTION_POINTS_RULES,
    "workflows": COLLECTION_WORKFLOWS,
}


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def run(path: Path) -> None:
    load_dotenv(_project_root() / ".env")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not init_firebase():
        print("Firestore is not configured", file=sys.stderr)
        sys.exit(1)
    client = get_firestore_client()
    assert client is not None
    store = FirestoreDocumentStore(client)
    try:
        for section, collection in _SECTIONS.items():
            created = skipped = 0
            for item in data.get(section, []):
                doc = dict(item)
                doc_id = doc.pop("id", None)
                doc.setdefault("created_at", SERVER_TIMESTAMP)
                try:
                    await store.create(collection, doc, document_id=doc_id)
                    created += 1
                except DocumentExistsError:
                    skipped += 1
            print(f"{collection}: {created} created, {skipped} skipped")
    finally:
        await close_firebase()
    print("Seed completed.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
