"""Aggregate counts over a sync run, cross-checked against the raw sources.

The checks here are advisory. They flag fetches that look incomplete but
never stop a sync.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

from prsync_core.models import Action, Entity, FetchedData

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass
class PRStats:
    # Conversation breakdown
    conversation: int
    issue_comments: int
    reviews_raw: int
    review_threads: int

    threads_resolved: int
    threads_unresolved: int

    reviews_filtered: int

    # Review comments, counted from thread comment lists
    review_comments: int
    thread_roots: int
    thread_replies: int

    total_entries: int
    pending_entries: int

    warnings: list[str] = field(default_factory=list)

    def to_summary(self) -> dict:
        """Fields keyed in camelCase, as printed by `sync --json`."""
        return {_camel(key): value for key, value in asdict(self).items()}


def compute_stats(data: FetchedData, entities: list[Entity]) -> PRStats:
    warnings: list[str] = []

    issue_comments = len(data.issue_comments)
    reviews_raw = len(data.reviews)
    review_threads = len(data.threads)
    conversation = issue_comments + reviews_raw + review_threads

    threads_resolved = sum(1 for t in data.threads if t.is_resolved)
    threads_unresolved = review_threads - threads_resolved

    # Re-applies the transformer's filter independently as a cross-check.
    reviews_filtered = sum(1 for r in data.reviews if not (r.state == "COMMENTED" and not (r.body or "").strip()))

    # The REST list can be cut short by paging, so totals come from threads.
    review_comments = sum(len(t.comments) for t in data.threads)
    thread_roots = review_threads
    thread_replies = review_comments - thread_roots

    total_entries = len(entities)
    pending_entries = sum(1 for e in entities if e.action == Action.PENDING)

    expected_conversation = issue_comments + reviews_raw + review_threads
    if conversation != expected_conversation:
        warnings.append(
            f"Conversation mismatch: {conversation} != {issue_comments} + {reviews_raw} + {review_threads}"
        )

    if review_comments < thread_roots:
        warnings.append(f"Review comments ({review_comments}) less than thread roots ({thread_roots})")

    for warning in warnings:
        logger.debug("Consistency check: %s", warning)

    return PRStats(
        conversation=conversation,
        issue_comments=issue_comments,
        reviews_raw=reviews_raw,
        review_threads=review_threads,
        threads_resolved=threads_resolved,
        threads_unresolved=threads_unresolved,
        reviews_filtered=reviews_filtered,
        review_comments=review_comments,
        thread_roots=thread_roots,
        thread_replies=thread_replies,
        total_entries=total_entries,
        pending_entries=pending_entries,
        warnings=warnings,
    )


def format_summary(stats: PRStats) -> str:
    """Render the human-readable summary printed after a sync."""
    lines = [
        "Summary:",
        f"Conversation: {stats.conversation}",
        f"  Issue Comments: {stats.issue_comments}",
        f"  Reviews (raw): {stats.reviews_raw}",
        f"  Review Threads: {stats.review_threads} "
        f"(resolved: {stats.threads_resolved}, unresolved: {stats.threads_unresolved})",
        "",
        f"Reviews (filtered): {stats.reviews_filtered}",
        f"Review Comments: {stats.review_comments} "
        f"(thread roots: {stats.thread_roots}, replies: {stats.thread_replies})",
        "",
        f"Output Entries: {stats.total_entries} (pending: {stats.pending_entries})",
    ]

    if stats.warnings:
        lines.append("")
        lines.append("WARNING: Data inconsistency detected:")
        lines.extend(f"  - {w}" for w in stats.warnings)

    return "\n".join(lines)
