"""Observability package: structured logging and Prometheus metrics."""

from __future__ import annotations

from memo_service.obs import logging as obs_logging

_initialised = False


def init() -> None:
	global _initialised
	if _initialised:
		return
	obs_logging.configure_logging()
	_initialised = True
