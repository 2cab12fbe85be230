"""Reaction listing, upsert and deletion for memos."""

from __future__ import annotations

import asyncio
import logging

from memo_service.infra.auth import Requester
from memo_service.memos.domain import models, names, policies
from memo_service.memos.domain import repo as repo_module
from memo_service.memos.domain.exceptions import InternalError, PermissionDeniedError
from memo_service.memos.domain.webhooks import WebhookDispatcher
from memo_service.memos.schemas import dto
from memo_service.obs import metrics as obs_metrics

_LOG = logging.getLogger(__name__)


class ReactionsService:
	"""Applies reaction mutations and triggers best-effort notification on upsert.

	Reactions carry no visibility tier of their own; content visibility is
	checked by the caller before reaching ``list_reactions``.
	"""

	def __init__(
		self,
		repository: repo_module.MemosRepository | None = None,
		dispatcher: WebhookDispatcher | None = None,
	) -> None:
		self.repo = repository or repo_module.MemosRepository()
		self.dispatcher = dispatcher

	@staticmethod
	def _reaction_to_response(reaction: models.Reaction) -> dto.ReactionResponse:
		return dto.ReactionResponse(
			id=reaction.id,
			name=reaction.name,
			creator=names.user_name(reaction.creator_id),
			content_id=reaction.content_id,
			reaction_type=reaction.reaction_type,
			create_time=reaction.created_at,
		)

	async def list_reactions(self, content_id: str) -> dto.ReactionListResponse:
		try:
			reactions = await self.repo.list_reactions(content_id)
		except Exception as exc:
			_LOG.error("reactions.list_failed", exc_info=True, extra={"content_id": content_id})
			raise InternalError("failed to list reactions") from exc
		return dto.ReactionListResponse(reactions=[self._reaction_to_response(item) for item in reactions])

	async def upsert_reaction(self, requester: Requester, payload: dto.ReactionUpsertRequest) -> dto.ReactionResponse:
		user = policies.require_authenticated(requester)
		try:
			reaction = await self.repo.upsert_reaction(
				creator_id=user.id,
				content_id=payload.content_id,
				reaction_type=payload.reaction_type,
			)
		except Exception as exc:
			_LOG.error(
				"reactions.upsert_failed",
				exc_info=True,
				extra={"content_id": payload.content_id, "user_id": user.id},
			)
			raise InternalError("failed to upsert reaction") from exc
		obs_metrics.inc_memo_reactions_upserted()
		_LOG.info(
			"reactions.upserted",
			extra={"reaction_id": reaction.id, "content_id": reaction.content_id, "user_id": user.id},
		)
		response = self._reaction_to_response(reaction)

		if self.dispatcher is not None:
			# Honour a pending cancellation before starting notification.
			task = asyncio.current_task()
			if task is not None and task.cancelling():
				raise asyncio.CancelledError()
			await self._notify(task, payload.content_id, reaction)
		return response

	async def _notify(self, task: asyncio.Task | None, content_id: str, reaction: models.Reaction) -> None:
		"""Run the dispatch to completion once started; the reaction is already committed."""
		assert self.dispatcher is not None
		dispatch = asyncio.ensure_future(self.dispatcher.dispatch_on_reaction(content_id, reaction))
		while not dispatch.done():
			try:
				await asyncio.shield(dispatch)
			except asyncio.CancelledError:
				if task is not None:
					task.uncancel()
				_LOG.warning(
					"reactions.cancel_during_notification_ignored",
					extra={"reaction_id": reaction.id, "content_id": content_id},
				)

	async def delete_reaction(self, requester: Requester, name: str) -> None:
		user = policies.require_authenticated(requester)
		_, reaction_id = names.extract_memo_reaction_id(name)
		try:
			reaction = await self.repo.get_reaction(reaction_id)
		except Exception as exc:
			_LOG.error("reactions.lookup_failed", exc_info=True, extra={"reaction_id": reaction_id})
			raise InternalError("failed to get reaction") from exc
		# Missing and not-owned share one error so callers cannot learn whether a reaction exists.
		if reaction is None or not policies.can_delete_reaction(reaction, user):
			obs_metrics.inc_memo_reaction_delete_denied()
			_LOG.warning("reactions.delete_denied", extra={"reaction_id": reaction_id, "user_id": user.id})
			raise PermissionDeniedError()
		try:
			await self.repo.delete_reaction(reaction_id)
		except Exception as exc:
			_LOG.error("reactions.delete_failed", exc_info=True, extra={"reaction_id": reaction_id})
			raise InternalError("failed to delete reaction") from exc
		obs_metrics.inc_memo_reactions_deleted()
		_LOG.info("reactions.deleted", extra={"reaction_id": reaction_id, "user_id": user.id})
