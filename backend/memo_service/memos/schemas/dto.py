"""Pydantic schemas for the memo core operations."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class ReactionUpsertRequest(BaseModel):
	content_id: str = Field(..., min_length=1)
	reaction_type: str = Field(..., min_length=1, max_length=64)


class ReactionResponse(BaseModel):
	id: int
	name: str
	creator: str
	content_id: str
	reaction_type: str
	create_time: datetime


class ReactionListResponse(BaseModel):
	reactions: List[ReactionResponse]


class ListTagsResponse(BaseModel):
	tags: List[str]
