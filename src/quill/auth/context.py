"""Who is making the current request."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .adapters.base import Principal


@dataclass(frozen=True)
class AuthContext:
    principal: Principal | None = None
    token: str | None = None

    @property
    def user_id(self) -> UUID | None:
        return self.principal.user_id if self.principal else None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None


ANONYMOUS = AuthContext()
