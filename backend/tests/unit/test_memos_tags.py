from __future__ import annotations

import itertools
import random
from datetime import datetime, timezone

import pytest

from memo_service.infra.auth import AuthenticatedUser
from memo_service.memos.domain import models, tags

OWNER = AuthenticatedUser(id="1")
VISITOR = AuthenticatedUser(id="2")
ADMIN = AuthenticatedUser(id="3", roles=("host",))


def _make_memo(idx: int, memo_tags: list[str], visibility: models.Visibility = models.Visibility.PUBLIC) -> models.Memo:
	now = datetime.now(timezone.utc)
	return models.Memo(
		id=idx,
		uid=f"memo-{idx}",
		creator_id=OWNER.id,
		content=f"Memo {idx}",
		visibility=visibility,
		tags=memo_tags,
		created_at=now,
		updated_at=now,
	)


@pytest.mark.parametrize(
	("given", "expected"),
	[
		(
			["work/project2", "work", "personal/family", "personal", "work/project1"],
			["personal", "personal/family", "work", "work/project1", "work/project2"],
		),
		(["a/b/c", "a", "b", "a/b"], ["a", "a/b", "a/b/c", "b"]),
		(["zebra", "apple", "banana"], ["apple", "banana", "zebra"]),
		(["a/b/c/d/e", "a/b", "a/b/c", "a", "a/b/c/d"], ["a", "a/b", "a/b/c", "a/b/c/d", "a/b/c/d/e"]),
		([], []),
		(["工作/项目", "工作", "个人", "个人/家庭"], ["个人", "个人/家庭", "工作", "工作/项目"]),
		(
			["🏪Resource/🏛️Culture", "🏪Resource", "work", "📚Resource/Books"],
			["🏪Resource", "📚Resource/Books", "🏪Resource/🏛️Culture", "work"],
		),
		(
			["🎄Event/🟡Trivial", "🖊️Area/💪MuscleGuy", "📝Notes"],
			["🖊️Area/💪MuscleGuy", "🎄Event/🟡Trivial", "📝Notes"],
		),
		(
			[
				"work/project2/task1",
				"work",
				"personal/family",
				"personal",
				"work/project1",
				"archive/2024/q1",
				"archive",
				"archive/2024",
			],
			[
				"archive",
				"archive/2024",
				"archive/2024/q1",
				"personal",
				"personal/family",
				"work",
				"work/project1",
				"work/project2/task1",
			],
		),
	],
)
def test_sort_tags_hierarchy(given, expected):
	assert tags.sort_tags(given) == expected


def test_sort_tags_strips_emoji_for_ordering_only():
	given = [
		"🏪Resource兴趣/🏛️Culture",
		"🏪Resource兴趣",
		"work",
		"📚Resource/Books",
		"🎯work/🎨project",
		"🌟personal",
	]
	assert tags.sort_tags(given) == [
		"📚Resource/Books",
		"🏪Resource兴趣",
		"🏪Resource兴趣/🏛️Culture",
		"🌟personal",
		"work",
		"🎯work/🎨project",
	]


@pytest.mark.parametrize(
	("segment", "expected"),
	[
		("🏛️Culture", "Culture"),
		("👩‍💻dev", "dev"),
		("👍🏽ok", "ok"),
		("🇯🇵travel", "travel"),
		("plain", "plain"),
		("中文", "中文"),
		("a-b_c.1", "a-b_c.1"),
		("🎉", ""),
		("a\uFE0Fb", "ab"),
		("1\u20E3x", "1x"),
	],
)
def test_strip_pictographs(segment, expected):
	assert tags.strip_pictographs(segment) == expected


def test_ties_on_normalized_key_fall_back_to_raw_order():
	assert tags.sort_tags(["📚books", "🏪books", "books"]) == ["books", "🏪books", "📚books"]
	assert tags.compare_tags("books", "🏪books") == -1
	assert tags.compare_tags("🏪books", "books") == 1
	assert tags.compare_tags("books", "books") == 0


def test_case_and_decoration_variants_stay_distinct():
	result = tags.sort_tags(["Work", "work", "🎯work", "work"])
	assert sorted(result) == sorted(["Work", "work", "🎯work"])
	assert len(result) == 3


def test_sort_is_independent_of_input_order():
	base = ["b", "a/c", "a", "🎯a/b", "A", "a/b/c", "中", "x/y", "📚x"]
	expected = tags.sort_tags(base)
	rng = random.Random(7)
	for _ in range(25):
		shuffled = list(base)
		rng.shuffle(shuffled)
		assert tags.sort_tags(shuffled) == expected


def test_comparator_is_antisymmetric_and_matches_sort_key():
	sample = ["a", "a/b", "🎯a", "b", "a/🎨b", "", "x"]
	for left, right in itertools.product(sample, repeat=2):
		assert tags.compare_tags(left, right) == -tags.compare_tags(right, left)
	assert sorted(sample, key=tags.comparator()) == sorted(sample, key=tags.tag_sort_key)


def test_ancestor_precedes_descendant_even_when_decorated():
	result = tags.sort_tags(["🎯work/🎨project", "work", "work/a", "worka"])
	assert result.index("work") < result.index("🎯work/🎨project")
	assert result.index("work") < result.index("work/a")


def test_dedup_trims_and_drops_blank():
	result = tags.sort_tags(["  alpha ", "alpha", "", "   ", "\t", "beta", "beta"])
	assert result == ["alpha", "beta"]


def test_never_synthesizes_ancestors():
	assert tags.sort_tags(["a/b/c", "x/y"]) == ["a/b/c", "x/y"]


def test_custom_normalizer_is_pluggable():
	result = tags.sort_tags(["B", "a", "C"], normalize=str.lower)
	assert result == ["a", "B", "C"]


def test_aggregate_tags_filters_by_visibility():
	memos = [
		_make_memo(1, ["public-tag"], models.Visibility.PUBLIC),
		_make_memo(2, ["protected-tag"], models.Visibility.PROTECTED),
		_make_memo(3, ["private-tag"], models.Visibility.PRIVATE),
	]
	assert tags.aggregate_tags(memos, OWNER) == ["private-tag", "protected-tag", "public-tag"]
	assert tags.aggregate_tags(memos, ADMIN) == ["private-tag", "protected-tag", "public-tag"]
	assert tags.aggregate_tags(memos, VISITOR) == ["protected-tag", "public-tag"]
	assert tags.aggregate_tags(memos, None) == ["public-tag"]


def test_aggregate_tags_visibility_is_monotonic():
	rng = random.Random(11)
	tiers = list(models.Visibility)
	memos = [
		_make_memo(idx, [f"t{rng.randint(0, 9)}", f"p/{rng.randint(0, 3)}"], rng.choice(tiers))
		for idx in range(40)
	]
	anonymous = set(tags.aggregate_tags(memos, None))
	visitor = set(tags.aggregate_tags(memos, VISITOR))
	owner = set(tags.aggregate_tags(memos, OWNER))
	admin = set(tags.aggregate_tags(memos, ADMIN))
	assert anonymous <= visitor <= owner
	assert owner == admin


def test_aggregate_tags_skips_empty_tags():
	memos = [_make_memo(1, ["", "valid-tag", ""]), _make_memo(2, [])]
	assert tags.aggregate_tags(memos, OWNER) == ["valid-tag"]


def test_aggregate_tags_no_memos():
	assert tags.aggregate_tags([], None) == []


def test_aggregate_tags_dedups_across_memos():
	memos = [_make_memo(1, ["x", "y"]), _make_memo(2, ["y", "x", "x/z"]), _make_memo(3, ["x"])]
	result = tags.aggregate_tags(memos, None)
	assert result == ["x", "x/z", "y"]
	assert len(result) == len(set(result))
