"""Custom exceptions for memo services."""

from __future__ import annotations

from fastapi import status


class MemoError(Exception):
	"""Base class for memo related errors."""

	status_code: int = status.HTTP_400_BAD_REQUEST
	code: str = "unknown"
	detail: str = "memo_error"

	def __init__(self, detail: str | None = None) -> None:
		super().__init__(detail or self.detail)
		if detail:
			self.detail = detail


class InvalidArgumentError(MemoError):
	"""Raised when a resource identifier or argument cannot be parsed."""

	status_code = status.HTTP_400_BAD_REQUEST
	code = "invalid_argument"
	detail = "invalid_argument"


class UnauthenticatedError(MemoError):
	"""Raised when an operation needs an identity and none was supplied."""

	status_code = status.HTTP_401_UNAUTHORIZED
	code = "unauthenticated"
	detail = "user not authenticated"


class PermissionDeniedError(MemoError):
	"""Raised when ownership or visibility checks fail.

	Also used for records that do not exist, so callers cannot tell the two
	apart.
	"""

	status_code = status.HTTP_403_FORBIDDEN
	code = "permission_denied"
	detail = "permission denied"


class InternalError(MemoError):
	"""Raised when the store fails unexpectedly."""

	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	code = "internal"
	detail = "internal error"
