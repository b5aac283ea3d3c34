"""Tests for stale thread detection and comment identity."""

from prca_core.issues import Finding
from prca_core.resolver import find_stale_threads
from prca_core.threads import DiscussionComment, DiscussionStatus, DiscussionThread


def make_finding(message="Missing semicolon", path="src/a.txt"):
    return Finding(affected_file_relative_path=path, line=1, message=message, rule="R1", provider_type="fake")


def make_thread(thread_id, comments=(), path="src/a.txt"):
    return DiscussionThread(
        id=thread_id,
        status=DiscussionStatus.ACTIVE,
        affected_file_relative_path=path,
        comment_source="prca",
        comments=tuple(comments),
    )


class TestCommentIdentity:
    def test_comments_with_same_id_are_equal(self):
        a = DiscussionComment(id="42", content="old text", thread_id="t1")
        b = DiscussionComment(id="42", content="new text", is_deleted=True, thread_id="t1")
        assert a == b
        assert len({a, b}) == 1

    def test_comments_with_different_id_differ(self):
        assert DiscussionComment(id="1", content="x") != DiscussionComment(id="2", content="x")

    def test_same_id_in_different_threads_differ(self):
        first = make_thread("t1", [DiscussionComment(id="1", content="x")]).comments[0]
        second = make_thread("t2", [DiscussionComment(id="1", content="x")]).comments[0]
        assert first != second
        assert len({first, second}) == 2

    def test_thread_binds_its_comments(self):
        thread = make_thread("t1", [DiscussionComment(id="1", content="x", thread_id="other"), None])
        assert thread.comments[0].thread_id == "t1"
        assert thread.comments[1] is None

    def test_thread_path_is_normalized(self):
        thread = DiscussionThread(
            id="t", status=DiscussionStatus.ACTIVE, affected_file_relative_path="src\\a.txt", comment_source="s"
        )
        assert thread.affected_file_relative_path == "src/a.txt"


class TestFindStaleThreads:
    def test_thread_with_live_comment_is_kept(self):
        thread = make_thread("t1", [DiscussionComment(id="c1", content="Missing semicolon")])
        assert find_stale_threads([thread], {make_finding(): [thread.comments[0]]}) == []

    def test_thread_without_live_comment_is_stale(self):
        thread = make_thread("t1", [DiscussionComment(id="c1", content="Old issue")])
        assert find_stale_threads([thread], {}) == [thread]

    def test_thread_with_live_and_stray_comments_is_kept(self):
        stray = DiscussionComment(id="c2", content="Thanks, will fix")
        live = DiscussionComment(id="c1", content="Missing semicolon")
        thread = make_thread("t1", [stray, live])
        assert find_stale_threads([thread], {make_finding(): [thread.comments[1]]}) == []

    def test_thread_without_comments_is_stale(self):
        thread = make_thread("t1")
        assert find_stale_threads([thread], {make_finding(): []}) == [thread]

    def test_thread_with_only_deleted_comments_is_stale(self):
        thread = make_thread("t1", [DiscussionComment(id="c1", content="x", is_deleted=True)])
        assert find_stale_threads([thread], {}) == [thread]

    def test_identity_uses_comment_id_not_object(self):
        fetched = DiscussionComment(id="c1", content="Missing semicolon")
        matched = DiscussionComment(id="c1", content="Missing semicolon", thread_id="t1")
        thread = make_thread("t1", [fetched])
        assert find_stale_threads([thread], {make_finding(): [matched]}) == []

    def test_comment_ids_numbered_per_thread(self):
        kept = make_thread("t1", [DiscussionComment(id="1", content="Still here")], path="a.py")
        fixed = make_thread("t2", [DiscussionComment(id="1", content="Fixed already")], path="b.py")

        stale = find_stale_threads([kept, fixed], {make_finding("Still here", "a.py"): [kept.comments[0]]})

        assert [t.id for t in stale] == ["t2"]

    def test_resolution_is_complete(self):
        keep = make_thread("keep", [DiscussionComment(id="live", content="a")])
        threads = [
            keep,
            make_thread("stale", [DiscussionComment(id="gone", content="b")]),
            make_thread("empty"),
        ]

        stale = find_stale_threads(threads, {make_finding("a"): [keep.comments[0]]})

        assert [t.id for t in stale] == ["stale", "empty"]
