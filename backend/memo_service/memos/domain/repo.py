"""Async repository helpers for the memo core."""

from __future__ import annotations

from memo_service.infra.postgres import get_pool
from memo_service.memos.domain import models


class MemosRepository:
	"""Thin data-access layer around asyncpg.

	Each method is a single statement, so atomicity comes from Postgres.
	"""

	# --- Memos ------------------------------------------------------------

	async def get_memo(self, uid: str) -> models.Memo | None:
		pool = await get_pool()
		async with pool.acquire() as conn:
			record = await conn.fetchrow("SELECT * FROM memo WHERE uid=$1", uid)
		return models.Memo.model_validate(dict(record)) if record else None

	async def list_memos(
		self,
		*,
		creator_id: str,
		row_status: models.RowStatus | None = models.RowStatus.NORMAL,
	) -> list[models.Memo]:
		pool = await get_pool()
		conditions = ["creator_id=$1"]
		params: list[object] = [creator_id]
		if row_status is not None:
			params.append(row_status.value)
			conditions.append("row_status=$%d" % len(params))
		query = f"""
			SELECT * FROM memo
			WHERE {" AND ".join(conditions)}
			ORDER BY created_at DESC, id DESC
		"""
		async with pool.acquire() as conn:
			rows = await conn.fetch(query, *params)
		return [models.Memo.model_validate(dict(row)) for row in rows]

	# --- Reactions --------------------------------------------------------

	async def get_reaction(self, reaction_id: int) -> models.Reaction | None:
		pool = await get_pool()
		async with pool.acquire() as conn:
			record = await conn.fetchrow("SELECT * FROM reaction WHERE id=$1", reaction_id)
		return models.Reaction.model_validate(dict(record)) if record else None

	async def list_reactions(self, content_id: str) -> list[models.Reaction]:
		pool = await get_pool()
		async with pool.acquire() as conn:
			rows = await conn.fetch(
				"SELECT * FROM reaction WHERE content_id=$1 ORDER BY created_at ASC, id ASC",
				content_id,
			)
		return [models.Reaction.model_validate(dict(row)) for row in rows]

	async def upsert_reaction(self, *, creator_id: str, content_id: str, reaction_type: str) -> models.Reaction:
		pool = await get_pool()
		async with pool.acquire() as conn:
			# The natural key resolves concurrent upserts to one row.
			record = await conn.fetchrow(
				"""
				INSERT INTO reaction (creator_id, content_id, reaction_type)
				VALUES ($1, $2, $3)
				ON CONFLICT (creator_id, content_id, reaction_type)
				DO UPDATE SET reaction_type = EXCLUDED.reaction_type
				RETURNING *
				""",
				creator_id,
				content_id,
				reaction_type,
			)
		return models.Reaction.model_validate(dict(record))

	async def delete_reaction(self, reaction_id: int) -> None:
		pool = await get_pool()
		async with pool.acquire() as conn:
			await conn.execute("DELETE FROM reaction WHERE id=$1", reaction_id)

	# --- Attachments ------------------------------------------------------

	async def list_attachments(self, memo_id: int) -> list[models.Attachment]:
		pool = await get_pool()
		async with pool.acquire() as conn:
			rows = await conn.fetch(
				"SELECT * FROM attachment WHERE memo_id=$1 ORDER BY created_at ASC, id ASC",
				memo_id,
			)
		return [models.Attachment.model_validate(dict(row)) for row in rows]

	# --- Webhooks ---------------------------------------------------------

	async def list_webhooks(self, creator_id: str) -> list[models.Webhook]:
		pool = await get_pool()
		async with pool.acquire() as conn:
			rows = await conn.fetch(
				"SELECT * FROM webhook WHERE creator_id=$1 ORDER BY id ASC",
				creator_id,
			)
		return [models.Webhook.model_validate(dict(row)) for row in rows]
