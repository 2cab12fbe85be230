"""Authorization policies for memo operations.

Every listing and mutation path decides visibility through ``can_view`` so the
rules cannot drift between endpoints.
"""

from __future__ import annotations

from typing import Iterable

from memo_service.infra.auth import AuthenticatedUser, Requester
from memo_service.memos.domain import models
from memo_service.memos.domain.exceptions import UnauthenticatedError


def can_view(visibility: models.Visibility, creator_id: str, requester: Requester) -> bool:
	"""Decide whether ``requester`` may see a memo with the given tier and owner."""
	if requester is not None and requester.id == creator_id:
		return True
	if requester is not None and requester.is_privileged:
		return True
	if visibility == models.Visibility.PUBLIC:
		return True
	if visibility == models.Visibility.PROTECTED and requester is not None:
		return True
	return False


def can_view_memo(memo: models.Memo, requester: Requester) -> bool:
	return can_view(memo.visibility, memo.creator_id, requester)


def filter_visible(memos: Iterable[models.Memo], requester: Requester) -> list[models.Memo]:
	# Evaluated per memo; no collection-wide shortcut.
	return [memo for memo in memos if can_view_memo(memo, requester)]


def require_authenticated(requester: Requester) -> AuthenticatedUser:
	if requester is None:
		raise UnauthenticatedError()
	return requester


def can_delete_reaction(reaction: models.Reaction, user: AuthenticatedUser) -> bool:
	# Ownership is the reaction's own creator, never the memo's.
	return reaction.creator_id == user.id or user.is_privileged
