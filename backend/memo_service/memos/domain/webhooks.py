"""Best-effort webhook notification after memo mutations.

Dispatch runs inline in the triggering call but never raises: every failure
is logged as a warning and counted, and the caller's result is unaffected.
There is one delivery attempt per endpoint, with no retry and no queue.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from memo_service.memos.domain import events, models, names
from memo_service.memos.domain import repo as repo_module
from memo_service.memos.domain.exceptions import InvalidArgumentError
from memo_service.memos.infra.webhook_client import WebhookTransport
from memo_service.obs import metrics as obs_metrics
from memo_service.settings import settings

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


class SystemReader:
	"""Privileged reads that bypass requester visibility.

	Webhooks always notify the memo creator, whoever triggered the mutation,
	so enrichment must not go through the requester-scoped paths. Keep these
	reads confined to notification code.
	"""

	def __init__(self, repository: repo_module.MemosRepository | None = None) -> None:
		self.repo = repository or repo_module.MemosRepository()

	async def get_memo(self, uid: str) -> models.Memo | None:
		return await self.repo.get_memo(uid)

	async def list_reactions(self, content_id: str) -> list[models.Reaction]:
		return await self.repo.list_reactions(content_id)

	async def list_attachments(self, memo_id: int) -> list[models.Attachment]:
		return await self.repo.list_attachments(memo_id)

	async def list_webhooks(self, creator_id: str) -> list[models.Webhook]:
		return await self.repo.list_webhooks(creator_id)


class WebhookDispatcher:
	"""Assembles enriched memo events and hands them to the webhook transport."""

	def __init__(
		self,
		*,
		reader: SystemReader,
		transport: WebhookTransport,
		enabled: bool | None = None,
	) -> None:
		self.reader = reader
		self.transport = transport
		self._enabled = enabled

	@property
	def enabled(self) -> bool:
		"""Explicit override, else the live ``settings.webhooks_enabled`` toggle."""
		return settings.webhooks_enabled if self._enabled is None else self._enabled

	async def dispatch_on_reaction(self, content_id: str, reaction: models.Reaction) -> None:
		try:
			await self._dispatch_on_reaction(content_id, reaction)
		except Exception:
			obs_metrics.inc_webhook_dispatch("failed")
			_LOG.warning(
				"webhooks.dispatch_failed",
				exc_info=True,
				extra={"content_id": content_id, "reaction_id": reaction.id},
			)

	async def _dispatch_on_reaction(self, content_id: str, reaction: models.Reaction) -> None:
		if not self.enabled:
			obs_metrics.inc_webhook_dispatch("skipped")
			_LOG.info("webhooks.disabled", extra={"content_id": content_id})
			return
		try:
			memo_uid = names.extract_memo_uid(content_id)
		except InvalidArgumentError as exc:
			self._abandon("invalid_content_id", content_id, error=exc)
			return
		try:
			memo = await self.reader.get_memo(memo_uid)
		except Exception as exc:
			self._abandon("memo_lookup_failed", content_id, error=exc)
			return
		if memo is None:
			self._abandon("memo_not_found", content_id)
			return

		reactions = await self._fetch_or_empty("reactions", self.reader.list_reactions, content_id)
		attachments = await self._fetch_or_empty("attachments", self.reader.list_attachments, memo.id)

		try:
			payload = events.memo_reacted_payload(
				memo,
				reaction,
				reactions=reactions,
				attachments=attachments,
			)
		except Exception as exc:
			self._abandon("payload_conversion_failed", content_id, error=exc)
			return
		await self._deliver(memo, payload)

	async def _fetch_or_empty(
		self,
		source: str,
		fetch: Callable[[Any], Awaitable[list[T]]],
		key: Any,
	) -> list[T]:
		try:
			return list(await fetch(key))
		except Exception as exc:
			obs_metrics.inc_webhook_enrichment_failure(source)
			_LOG.warning(
				"webhooks.enrichment_failed",
				extra={"source": source, "key": str(key), "error": exc},
			)
			return []

	async def _deliver(self, memo: models.Memo, payload: Mapping[str, Any]) -> None:
		try:
			webhooks = await self.reader.list_webhooks(memo.creator_id)
		except Exception as exc:
			obs_metrics.inc_webhook_dispatch("failed")
			_LOG.warning(
				"webhooks.lookup_failed",
				extra={"memo": memo.name, "creator_id": memo.creator_id, "error": exc},
			)
			return
		if not webhooks:
			obs_metrics.inc_webhook_dispatch("skipped")
			return
		for webhook in webhooks:
			try:
				await self.transport.post(webhook.url, payload)
			except Exception as exc:
				obs_metrics.inc_webhook_dispatch("failed")
				_LOG.warning(
					"webhooks.delivery_failed",
					extra={"memo": memo.name, "webhook_id": webhook.id, "webhook_url": webhook.url, "error": exc},
				)
				continue
			obs_metrics.inc_webhook_dispatch("delivered")
			_LOG.info("webhooks.delivered", extra={"memo": memo.name, "webhook_id": webhook.id})

	@staticmethod
	def _abandon(reason: str, content_id: str, *, error: Exception | None = None) -> None:
		obs_metrics.inc_webhook_dispatch("abandoned")
		_LOG.warning(
			"webhooks.dispatch_abandoned",
			extra={"reason": reason, "content_id": content_id, "error": error},
		)
