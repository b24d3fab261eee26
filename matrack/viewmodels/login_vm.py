from __future__ import annotations

from typing import Any, Dict, Optional

from matrack.domain.ports import UseCaseError
from matrack.usecases.auth import Login

from .page_base import Notify, noop_notify


class LoginVM:
    """Login form state; no I/O beyond the injected ``Login`` use case."""

    def __init__(self, *, login: Login, notify: Optional[Notify] = None) -> None:
        self.login_uc = login
        self.notify: Notify = notify or noop_notify
        self.email = ""
        self.password = ""
        self.submitting = False
        self.user: Dict[str, Any] = {}

    @property
    def can_submit(self) -> bool:
        return bool(self.email.strip() and self.password) and not self.submitting

    async def submit(self) -> bool:
        if not self.can_submit:
            return False
        self.submitting = True
        try:
            self.user = await self.login_uc(self.email, self.password)
        except UseCaseError as exc:
            self.notify(exc.message, "negative")
            return False
        finally:
            self.submitting = False
        self.password = ""
        self.notify("Login successful!", "positive")
        return True
