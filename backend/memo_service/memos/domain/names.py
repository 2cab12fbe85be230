"""Resource name helpers (``users/{id}``, ``memos/{uid}``, ``memos/{uid}/reactions/{id}``)."""

from __future__ import annotations

from memo_service.memos.domain.exceptions import InvalidArgumentError

USER_NAME_PREFIX = "users/"
MEMO_NAME_PREFIX = "memos/"
REACTION_NAME_PREFIX = "reactions/"
ATTACHMENT_NAME_PREFIX = "attachments/"


def _split(name: str, *prefixes: str) -> list[str]:
	"""Return the ids between the given prefixes, or raise ValueError."""
	parts = name.split("/")
	if len(parts) != 2 * len(prefixes):
		raise ValueError(f"expected {len(prefixes)} segment pair(s)")
	ids: list[str] = []
	for idx, prefix in enumerate(prefixes):
		if parts[2 * idx] + "/" != prefix:
			raise ValueError(f"expected prefix {prefix!r}")
		value = parts[2 * idx + 1]
		if not value.strip():
			raise ValueError("empty id")
		ids.append(value)
	return ids


def user_name(user_id: str) -> str:
	return f"{USER_NAME_PREFIX}{user_id}"


def memo_name(uid: str) -> str:
	return f"{MEMO_NAME_PREFIX}{uid}"


def reaction_name(content_id: str, reaction_id: int) -> str:
	# content_id already carries the "memos/{uid}" part
	return f"{content_id}/{REACTION_NAME_PREFIX}{reaction_id}"


def attachment_name(uid: str) -> str:
	return f"{ATTACHMENT_NAME_PREFIX}{uid}"


def extract_user_id(name: str) -> str:
	try:
		(user_id,) = _split(name, USER_NAME_PREFIX)
	except ValueError as exc:
		raise InvalidArgumentError(f"invalid user name: {exc}") from exc
	return user_id


def extract_memo_uid(name: str) -> str:
	try:
		(uid,) = _split(name, MEMO_NAME_PREFIX)
	except ValueError as exc:
		raise InvalidArgumentError(f"invalid memo name: {exc}") from exc
	return uid


def extract_memo_reaction_id(name: str) -> tuple[str, int]:
	"""Split ``memos/{uid}/reactions/{id}`` into the memo uid and the reaction id."""
	try:
		uid, raw_id = _split(name, MEMO_NAME_PREFIX, REACTION_NAME_PREFIX)
		reaction_id = int(raw_id)
	except ValueError as exc:
		raise InvalidArgumentError(f"invalid reaction name: {exc}") from exc
	return uid, reaction_id
