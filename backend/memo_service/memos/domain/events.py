"""Helper utilities to format webhook payloads for memos."""

from __future__ import annotations

from typing import Any, Sequence

from memo_service.memos.domain import models, names

ACTIVITY_MEMO_REACTED = "memos.memo.reacted"


def memo_payload(memo: models.Memo) -> dict[str, Any]:
	return {
		"name": memo.name,
		"uid": memo.uid,
		"creator": names.user_name(memo.creator_id),
		"content": memo.content,
		"visibility": memo.visibility.value,
		"tags": list(memo.tags),
		"pinned": memo.pinned,
		"create_time": memo.created_at.isoformat(),
		"update_time": memo.updated_at.isoformat(),
	}


def reaction_payload(reaction: models.Reaction) -> dict[str, Any]:
	return {
		"name": reaction.name,
		"creator": names.user_name(reaction.creator_id),
		"content_id": reaction.content_id,
		"reaction_type": reaction.reaction_type,
		"create_time": reaction.created_at.isoformat(),
	}


def attachment_payload(attachment: models.Attachment) -> dict[str, Any]:
	return {
		"name": attachment.name,
		"filename": attachment.filename,
		"type": attachment.type,
		"size": attachment.size,
		"create_time": attachment.created_at.isoformat(),
	}


def memo_reacted_payload(
	memo: models.Memo,
	reaction: models.Reaction,
	*,
	reactions: Sequence[models.Reaction],
	attachments: Sequence[models.Attachment],
) -> dict[str, Any]:
	"""Snapshot sent to the memo creator's webhooks after a reaction upsert."""
	return {
		"activity_type": ACTIVITY_MEMO_REACTED,
		"creator": names.user_name(memo.creator_id),
		"content": memo_payload(memo),
		"reaction": reaction_payload(reaction),
		"reactions": [reaction_payload(item) for item in reactions],
		"attachments": [attachment_payload(item) for item in attachments],
	}
