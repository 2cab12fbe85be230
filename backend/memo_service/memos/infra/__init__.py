"""Infrastructure helpers scoped to the memos domain."""

from . import webhook_client  # noqa: F401

__all__ = [
	"webhook_client",
]
