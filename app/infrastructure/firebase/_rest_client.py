"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Writes go through ``documents:commit`` so preconditions, server-time
transforms and multi-document batches share one code path.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from app.infrastructure.exceptions import DocumentStoreError

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class CommitRejected(Exception):
    """A commit failed a precondition (404 NOT_FOUND or 409 ALREADY_EXISTS)."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(resp: httpx.Response) -> str:
    try:
        return str(resp.json().get("error", {}).get("message") or resp.text)
    except ValueError:
        return resp.text


class FirestoreRESTClient:
    """Lightweight Firestore client using the REST API."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._database = f"projects/{project_id}/databases/(default)"
        self.documents_root = f"{self._database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def document_name(self, collection: str, document_id: str) -> str:
        return f"{self.documents_root}/{collection}/{document_id}"

    async def _send(self, operation: str, method: str, url: str, body: dict | None = None) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {await self.get_token()}",
        }
        try:
            return await self._http.request(method, url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise DocumentStoreError(operation, None, str(exc)) from exc

    async def get_document(self, name: str) -> dict | None:
        """GET one document resource; None on 404."""
        resp = await self._send("get", "GET", f"{_BASE}/{name}")
        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            raise DocumentStoreError("get", resp.status_code, _error_message(resp))
        return resp.json()

    async def run_query(self, structured_query: dict[str, Any]) -> list[dict]:
        """Run a structured query against the root collection group; return document resources."""
        resp = await self._send(
            "query",
            "POST",
            f"{_BASE}/{self.documents_root}:runQuery",
            {"structuredQuery": structured_query},
        )
        if resp.status_code != 200:
            raise DocumentStoreError("query", resp.status_code, _error_message(resp))
        items = resp.json()
        if not isinstance(items, list):
            items = [items] if items else []
        return [item["document"] for item in items if "document" in item]

    async def commit(self, writes: list[dict[str, Any]]) -> dict:
        """Apply writes atomically.

        Raises:
            CommitRejected: a currentDocument precondition failed.
            DocumentStoreError: any other non-200 response.
        """
        resp = await self._send(
            "commit", "POST", f"{_BASE}/{self._database}/documents:commit", {"writes": writes}
        )
        if resp.status_code in (404, 409):
            raise CommitRejected(resp.status_code, _error_message(resp))
        if resp.status_code == 400 and "FAILED_PRECONDITION" in resp.text:
            raise CommitRejected(404, _error_message(resp))
        if resp.status_code != 200:
            raise DocumentStoreError("commit", resp.status_code, _error_message(resp))
        return resp.json() if resp.content else {}
