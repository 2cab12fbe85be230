"""Domain models for memos, reactions, attachments and webhooks."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from memo_service.memos.domain import names


class Visibility(str, Enum):
	"""Visibility tier of a memo."""

	PRIVATE = "PRIVATE"
	PROTECTED = "PROTECTED"
	PUBLIC = "PUBLIC"


class RowStatus(str, Enum):
	NORMAL = "NORMAL"
	ARCHIVED = "ARCHIVED"


class Memo(BaseModel):
	"""Represents a memo owned by its creator."""

	id: int
	uid: str
	creator_id: str
	content: str = ""
	visibility: Visibility = Visibility.PRIVATE
	tags: list[str] = Field(default_factory=list)
	pinned: bool = False
	row_status: RowStatus = RowStatus.NORMAL
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)

	@property
	def name(self) -> str:
		return names.memo_name(self.uid)


class Reaction(BaseModel):
	"""Represents a reaction left on a memo.

	``content_id`` is the memo resource name (``memos/{uid}``).
	"""

	id: int
	content_id: str
	creator_id: str
	reaction_type: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)

	@property
	def name(self) -> str:
		return names.reaction_name(self.content_id, self.id)


class Attachment(BaseModel):
	"""Represents a file attached to a memo."""

	id: int
	uid: str
	creator_id: str
	memo_id: Optional[int] = None
	filename: str
	type: str = ""
	size: int = 0
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)

	@property
	def name(self) -> str:
		return names.attachment_name(self.uid)


class Webhook(BaseModel):
	"""An endpoint a user registered to be notified about their memos."""

	id: int
	creator_id: str
	name: str = ""
	url: str
	created_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)
