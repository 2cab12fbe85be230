"""Resolved requester identity handed to the memo core.

Authentication and session establishment happen upstream; by the time a call
reaches the core the caller is either an ``AuthenticatedUser`` or ``None``
(anonymous).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from memo_service.settings import settings


@dataclass(slots=True, frozen=True)
class AuthenticatedUser:
	id: str
	username: Optional[str] = None
	roles: Tuple[str, ...] = ()

	def has_role(self, role: str) -> bool:
		return role.lower() in {r.lower() for r in self.roles}

	@property
	def is_privileged(self) -> bool:
		return any(self.has_role(role) for role in settings.privileged_roles)


Requester = Optional[AuthenticatedUser]
