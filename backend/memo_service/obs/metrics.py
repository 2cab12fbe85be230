"""Central registry for Prometheus metrics used by the memo core."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

MEMO_REACTIONS_UPSERTED = Counter(
	"memo_reactions_upserted_total",
	"Reactions created or replaced",
)

MEMO_REACTIONS_DELETED = Counter(
	"memo_reactions_deleted_total",
	"Reactions removed by their creator or a privileged user",
)

MEMO_REACTION_DELETE_DENIED = Counter(
	"memo_reaction_delete_denied_total",
	"Reaction deletions rejected with permission_denied (missing or not owned)",
)

MEMO_WEBHOOK_DISPATCH = Counter(
	"memo_webhook_dispatch_total",
	"Webhook dispatch attempts by outcome",
	["outcome"],
)

MEMO_WEBHOOK_ENRICHMENT_FAILURES = Counter(
	"memo_webhook_enrichment_failures_total",
	"Webhook payload enrichment fetches that failed and were replaced by empty lists",
	["source"],
)

MEMO_TAGS_LISTED = Histogram(
	"memo_tags_listed",
	"Number of tags returned per tag listing",
	buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500, 1000),
)


def inc_memo_reactions_upserted() -> None:
	MEMO_REACTIONS_UPSERTED.inc()


def inc_memo_reactions_deleted() -> None:
	MEMO_REACTIONS_DELETED.inc()


def inc_memo_reaction_delete_denied() -> None:
	MEMO_REACTION_DELETE_DENIED.inc()


def inc_webhook_dispatch(outcome: str) -> None:
	MEMO_WEBHOOK_DISPATCH.labels(outcome=outcome).inc()


def inc_webhook_enrichment_failure(source: str) -> None:
	MEMO_WEBHOOK_ENRICHMENT_FAILURES.labels(source=source).inc()


def observe_tags_listed(count: int) -> None:
	MEMO_TAGS_LISTED.observe(count)
