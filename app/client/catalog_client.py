import logging
from typing import Any, Dict, List, Optional

import httpx

from app.client.session import ClientSession

logger = logging.getLogger(__name__)


class CatalogAPIError(Exception):
    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{status_code}] {message}")


class CatalogClient:
    """
    Synchronous client for the catalog HTTP API.

    Requests are never retried here: create is not idempotent, so
    retrying is left to the caller.
    """

    def __init__(
        self,
        base_url: str,
        session: ClientSession,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.session = session
        self._http = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=5.0),
            transport=transport,
        )

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        try:
            response = self._http.request(method, path, json=json, headers=self.session.auth_headers())
        except httpx.RequestError as e:
            logger.warning(f"[CatalogClient] {method} {path} failed: {e}")
            raise CatalogAPIError(None, f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("success", False):
            message = body.get("message") or response.reason_phrase
            raise CatalogAPIError(response.status_code, message)
        return body

    # --- auth ---

    def register(self, username: str, email: str, password: str, full_name: Optional[str] = None) -> Dict[str, Any]:
        body = self._request("POST", "/auth/register", json={
            "username": username,
            "email": email,
            "password": password,
            "fullName": full_name,
        })
        self.session.store(body["data"])
        return self.session.user

    def login(self, username_or_email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/login", json={
            "usernameOrEmail": username_or_email,
            "password": password,
        })
        self.session.store(body["data"])
        return self.session.user

    def logout(self):
        self.session.clear()

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["data"]

    # --- books ---

    def list_books(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/books")["data"]

    def get_book(self, book_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/books/{book_id}")["data"]

    def create_book(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/books", json=fields)["data"]

    def update_book(self, book_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/books/{book_id}", json=fields)["data"]

    def delete_book(self, book_id: int):
        self._request("DELETE", f"/books/{book_id}")

    def dashboard_stats(self) -> Dict[str, int]:
        books = self.list_books()
        return {
            "totalBooks": len(books),
            "availableBooks": sum(b["available"] for b in books),
            "categories": len({b["category"] for b in books}),
        }
