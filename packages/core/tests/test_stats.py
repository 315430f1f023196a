"""Tests for the consistency checker and summary rendering."""

from prsync_core.models import FetchedData, IssueComment, Review, ReviewThread, ThreadComment
from prsync_core.stats import compute_stats, format_summary
from prsync_core.transformer import transform


def _thread(thread_id, n_comments, is_resolved=False):
    comments = [
        ThreadComment(id=f"{thread_id}_c{i}", body="x", author="alice", created_at="2024-01-01T00:00:00Z")
        for i in range(n_comments)
    ]
    return ReviewThread(id=thread_id, is_resolved=is_resolved, comments=comments)


def _stats(data):
    return compute_stats(data, transform(data))


class TestComputeStats:
    def test_thread_roots_and_replies(self):
        data = FetchedData(threads=[_thread("PRRT_1", 3), _thread("PRRT_2", 1), _thread("PRRT_3", 1)])
        stats = _stats(data)
        assert stats.review_comments == 5
        assert stats.thread_roots == 3
        assert stats.thread_replies == 2
        assert stats.warnings == []

    def test_warns_when_fewer_comments_than_threads(self):
        data = FetchedData(threads=[_thread("PRRT_1", 2), _thread("PRRT_2", 0), _thread("PRRT_3", 0)])
        stats = _stats(data)
        assert stats.review_comments == 2
        assert stats.warnings == ["Review comments (2) less than thread roots (3)"]

    def test_conversation_and_resolution_counts(self):
        data = FetchedData(
            threads=[_thread("PRRT_1", 1, is_resolved=True), _thread("PRRT_2", 1)],
            reviews=[
                Review(id="PRR_1", author="a", state="COMMENTED", body=""),
                Review(id="PRR_2", author="b", state="CHANGES_REQUESTED", body="Fix it"),
            ],
            issue_comments=[
                IssueComment(id="1", node_id="IC_1", author="c", body="hi", created_at="2024-01-01T00:00:00Z")
            ],
        )
        stats = _stats(data)
        assert stats.conversation == 5
        assert stats.issue_comments == 1
        assert stats.reviews_raw == 2
        assert stats.review_threads == 2
        assert stats.threads_resolved == 1
        assert stats.threads_unresolved == 1
        assert stats.reviews_filtered == 1
        assert stats.total_entries == 4
        # Resolved thread is done; the rest are pending.
        assert stats.pending_entries == 3

    def test_flat_review_comments_not_used_for_totals(self):
        data = FetchedData(threads=[_thread("PRRT_1", 2)], review_comments=[])
        assert _stats(data).review_comments == 2

    def test_empty_snapshot(self):
        stats = _stats(FetchedData())
        assert stats.conversation == 0
        assert stats.total_entries == 0
        assert stats.warnings == []

    def test_summary_keys_are_camel_case(self):
        summary = _stats(FetchedData()).to_summary()
        assert set(summary) == {
            "conversation", "issueComments", "reviewsRaw", "reviewThreads",
            "threadsResolved", "threadsUnresolved", "reviewsFiltered",
            "reviewComments", "threadRoots", "threadReplies",
            "totalEntries", "pendingEntries", "warnings",
        }


class TestFormatSummary:
    def test_includes_counts(self):
        data = FetchedData(threads=[_thread("PRRT_1", 2, is_resolved=True)])
        text = format_summary(_stats(data))
        assert text.startswith("Summary:")
        assert "Review Threads: 1 (resolved: 1, unresolved: 0)" in text
        assert "Review Comments: 2 (thread roots: 1, replies: 1)" in text
        assert "Output Entries: 1 (pending: 0)" in text
        assert "WARNING" not in text

    def test_lists_warnings(self):
        data = FetchedData(threads=[_thread("PRRT_1", 0)])
        text = format_summary(_stats(data))
        assert "WARNING: Data inconsistency detected:" in text
        assert "  - Review comments (0) less than thread roots (1)" in text
