"""Outbound webhook delivery over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import httpx

from memo_service.settings import settings


class WebhookDeliveryError(Exception):
	"""Raised when an endpoint could not be reached or rejected the payload."""


class WebhookTransport(Protocol):
	"""Interface for posting a webhook payload to one endpoint."""

	async def post(self, url: str, payload: Mapping[str, Any]) -> None:
		...


@dataclass
class HttpWebhookTransport(WebhookTransport):
	"""Single-attempt JSON POST using a shared httpx client."""

	http: httpx.AsyncClient
	timeout: float = field(default_factory=lambda: settings.webhook_timeout_seconds)
	user_agent: str = field(default_factory=lambda: settings.webhook_user_agent)

	async def post(self, url: str, payload: Mapping[str, Any]) -> None:
		try:
			response = await self.http.post(
				url,
				json=dict(payload),
				headers={"User-Agent": self.user_agent},
				timeout=self.timeout,
			)
		except httpx.HTTPError as exc:
			raise WebhookDeliveryError(f"request to webhook failed: {exc}") from exc
		if not response.is_success:
			raise WebhookDeliveryError(f"webhook responded with status {response.status_code}")
