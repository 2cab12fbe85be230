"""Lightweight service container for the memo core."""

from __future__ import annotations

from typing import Optional

import httpx

from memo_service import obs
from memo_service.infra import postgres
from memo_service.memos.domain.reactions_service import ReactionsService
from memo_service.memos.domain.repo import MemosRepository
from memo_service.memos.domain.tags_service import TagsService
from memo_service.memos.domain.webhooks import SystemReader, WebhookDispatcher
from memo_service.memos.infra.webhook_client import HttpWebhookTransport
from memo_service.settings import settings

_repository = MemosRepository()
_http_client: Optional[httpx.AsyncClient] = None
_dispatcher: Optional[WebhookDispatcher] = None
_reactions_service: Optional[ReactionsService] = None
_tags_service: Optional[TagsService] = None


def get_http_client() -> httpx.AsyncClient:
	global _http_client
	if _http_client is None:
		_http_client = httpx.AsyncClient(timeout=settings.webhook_timeout_seconds)
	return _http_client


def get_dispatcher() -> WebhookDispatcher:
	global _dispatcher
	if _dispatcher is None:
		_dispatcher = WebhookDispatcher(
			reader=SystemReader(_repository),
			transport=HttpWebhookTransport(http=get_http_client()),
		)
	return _dispatcher


def get_reactions_service() -> ReactionsService:
	global _reactions_service
	if _reactions_service is None:
		_reactions_service = ReactionsService(_repository, dispatcher=get_dispatcher())
	return _reactions_service


def get_tags_service() -> TagsService:
	global _tags_service
	if _tags_service is None:
		_tags_service = TagsService(_repository)
	return _tags_service


async def startup() -> None:
	obs.init()
	await postgres.init_pool()


async def shutdown() -> None:
	global _http_client, _dispatcher, _reactions_service, _tags_service
	if _http_client is not None:
		await _http_client.aclose()
	_http_client = None
	_dispatcher = None
	_reactions_service = None
	_tags_service = None
	await postgres.close_pool()
