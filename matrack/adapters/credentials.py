from __future__ import annotations

from typing import MutableMapping, Optional

from matrack.domain.ports import CredentialPort

TOKEN_KEY = "token"


class SessionCredentialStore(CredentialPort):
    """Bearer token kept in a per-browser-session mapping.

    The web runtime passes NiceGUI's ``app.storage.user``; tests and scripts
    can pass a plain ``dict`` or nothing at all.
    """

    def __init__(self, storage: Optional[MutableMapping[str, str]] = None) -> None:
        self.storage = storage if storage is not None else {}

    def token(self) -> Optional[str]:
        value = self.storage.get(TOKEN_KEY)
        return value if isinstance(value, str) and value else None

    def store(self, token: str) -> None:
        text = str(token or "").strip()
        if text:
            self.storage[TOKEN_KEY] = text
        else:
            self.clear()

    def clear(self) -> None:
        self.storage.pop(TOKEN_KEY, None)
