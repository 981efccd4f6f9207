from typing import Any, Dict, Optional


class ClientSession:
    """
    Credential + cached profile held by a CatalogClient.

    Owned by the caller and passed in explicitly; nothing is global.
    clear() is the logout path.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def store(self, payload: Dict[str, Any]):
        """Keeps the token and profile from a login/register response."""
        self.token = payload["token"]
        self.user = {k: v for k, v in payload.items() if k != "token"}

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def clear(self):
        self.token = None
        self.user = None
