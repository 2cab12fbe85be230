from __future__ import annotations

from datetime import datetime, timezone

import pytest

from memo_service.infra.auth import AuthenticatedUser
from memo_service.memos.domain import models, policies
from memo_service.memos.domain.exceptions import UnauthenticatedError

OWNER = AuthenticatedUser(id="1", username="owner")
VISITOR = AuthenticatedUser(id="2", username="visitor")
ADMIN = AuthenticatedUser(id="3", username="admin", roles=("ADMIN",))


def _make_reaction(creator_id: str) -> models.Reaction:
	return models.Reaction(
		id=10,
		content_id="memos/abc",
		creator_id=creator_id,
		reaction_type="👍",
		created_at=datetime.now(timezone.utc),
	)


@pytest.mark.parametrize(
	("visibility", "requester", "expected"),
	[
		(models.Visibility.PRIVATE, OWNER, True),
		(models.Visibility.PROTECTED, OWNER, True),
		(models.Visibility.PUBLIC, OWNER, True),
		(models.Visibility.PRIVATE, ADMIN, True),
		(models.Visibility.PROTECTED, ADMIN, True),
		(models.Visibility.PRIVATE, VISITOR, False),
		(models.Visibility.PROTECTED, VISITOR, True),
		(models.Visibility.PUBLIC, VISITOR, True),
		(models.Visibility.PRIVATE, None, False),
		(models.Visibility.PROTECTED, None, False),
		(models.Visibility.PUBLIC, None, True),
	],
)
def test_can_view_matrix(visibility, requester, expected):
	assert policies.can_view(visibility, OWNER.id, requester) is expected


def test_privileged_roles_come_from_settings(monkeypatch):
	from memo_service.settings import settings

	monkeypatch.setattr(settings, "privileged_roles", ("moderator",))
	moderator = AuthenticatedUser(id="9", roles=("moderator",))
	assert policies.can_view(models.Visibility.PRIVATE, OWNER.id, moderator)
	assert not policies.can_view(models.Visibility.PRIVATE, OWNER.id, ADMIN)


def test_require_authenticated_rejects_anonymous():
	with pytest.raises(UnauthenticatedError) as excinfo:
		policies.require_authenticated(None)
	assert excinfo.value.status_code == 401
	assert excinfo.value.code == "unauthenticated"


def test_require_authenticated_returns_user():
	assert policies.require_authenticated(VISITOR) is VISITOR


def test_can_delete_reaction_uses_reaction_creator():
	reaction = _make_reaction(creator_id=VISITOR.id)
	# The memo owner is not the reaction owner.
	assert not policies.can_delete_reaction(reaction, OWNER)
	assert policies.can_delete_reaction(reaction, VISITOR)
	assert policies.can_delete_reaction(reaction, ADMIN)
