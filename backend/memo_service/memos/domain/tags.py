"""Hierarchical tag aggregation.

Tags are free-form ``/``-separated paths. Listing merges the tags of every
memo the requester may see, drops blanks, removes exact duplicates and orders
the result so that ancestors come before descendants. Ordering compares each
segment with emoji and other pictographs stripped, so ``🏪Resource`` sorts
next to ``Resource``; the raw string only breaks ties.

Everything here is pure and independent of storage.
"""

from __future__ import annotations

import unicodedata
from functools import cmp_to_key, partial
from typing import Callable, Iterable, Sequence

from memo_service.infra.auth import Requester
from memo_service.memos.domain import models, policies

TAG_SEPARATOR = "/"

TagNormalizer = Callable[[str], str]
TagSortKey = tuple[tuple[str, ...], str]

_VARIATION_SELECTORS = range(0xFE00, 0xFE10)
_SKIN_TONE_MODIFIERS = range(0x1F3FB, 0x1F400)
_TAG_CHARACTERS = range(0xE0020, 0xE0080)
_COMBINING_KEYCAP = 0x20E3
_ZERO_WIDTH_JOINER = 0x200D


def _is_pictograph(char: str) -> bool:
	return unicodedata.category(char) == "So" or ord(char) in _SKIN_TONE_MODIFIERS


def _is_emoji_modifier(char: str) -> bool:
	codepoint = ord(char)
	return (
		codepoint in _VARIATION_SELECTORS
		or codepoint in _TAG_CHARACTERS
		or codepoint == _COMBINING_KEYCAP
	)


def strip_pictographs(segment: str) -> str:
	"""Remove emoji and other pictographic symbols from a tag segment.

	Variation selectors, keycaps and tag characters are dropped wherever they
	appear. A zero-width joiner is dropped only inside an emoji sequence, so
	scripts that rely on it keep it.
	"""
	kept: list[str] = []
	in_sequence = False
	for char in segment:
		if _is_pictograph(char):
			in_sequence = True
			continue
		if _is_emoji_modifier(char):
			continue
		if in_sequence and ord(char) == _ZERO_WIDTH_JOINER:
			continue
		in_sequence = False
		kept.append(char)
	return "".join(kept)


def split_segments(tag: str) -> list[str]:
	return tag.split(TAG_SEPARATOR)


def tag_sort_key(tag: str, *, normalize: TagNormalizer = strip_pictographs) -> TagSortKey:
	"""Sort key placing ancestors first, then normalized order, then raw order."""
	return tuple(normalize(segment) for segment in split_segments(tag)), tag


def compare_tags(left: str, right: str, *, normalize: TagNormalizer = strip_pictographs) -> int:
	left_key = tag_sort_key(left, normalize=normalize)
	right_key = tag_sort_key(right, normalize=normalize)
	if left_key < right_key:
		return -1
	if left_key > right_key:
		return 1
	return 0


def clean_tag(tag: str) -> str | None:
	trimmed = tag.strip()
	return trimmed or None


def collect_tags(memos: Iterable[models.Memo]) -> list[str]:
	"""Flatten the tags of ``memos``, trimmed, with blanks dropped. Duplicates stay."""
	collected: list[str] = []
	for memo in memos:
		for tag in memo.tags:
			cleaned = clean_tag(tag)
			if cleaned is not None:
				collected.append(cleaned)
	return collected


def sort_tags(tags: Iterable[str], *, normalize: TagNormalizer = strip_pictographs) -> list[str]:
	"""Deduplicate and order tags hierarchically. Never synthesizes ancestors."""
	unique = {cleaned for cleaned in (clean_tag(tag) for tag in tags) if cleaned is not None}
	return sorted(unique, key=partial(tag_sort_key, normalize=normalize))


def aggregate_tags(
	memos: Sequence[models.Memo],
	requester: Requester,
	*,
	normalize: TagNormalizer = strip_pictographs,
) -> list[str]:
	"""Return the ordered, deduplicated tags of the memos ``requester`` can see."""
	visible = policies.filter_visible(memos, requester)
	return sort_tags(collect_tags(visible), normalize=normalize)


def comparator(normalize: TagNormalizer = strip_pictographs):
	"""``functools.cmp_to_key`` wrapper for callers that sort with ``key=``."""
	return cmp_to_key(partial(compare_tags, normalize=normalize))
