"""Unit tests for CI event classification."""

import pytest

from monorepo_push.config.settings import EventContext
from monorepo_push.enums import EventKind
from monorepo_push.git.refs import (
    BranchTrigger,
    PullRequestTrigger,
    TagTrigger,
    UnknownTrigger,
    classify_ref,
    classify_trigger,
    ref_trigger,
)


class TestClassifyTrigger:
    """Tests for classify_trigger."""

    def test_tag_push(self) -> None:
        ctx = EventContext(event_name="push", ref="refs/tags/v1.0.0")

        assert classify_trigger(ctx) == TagTrigger(name="v1.0.0")

    def test_branch_push(self) -> None:
        ctx = EventContext(event_name="push", ref="refs/heads/main")

        assert classify_trigger(ctx) == BranchTrigger(name="main")

    def test_branch_with_slashes(self) -> None:
        """Test that only the refs/heads/ prefix is removed."""
        ctx = EventContext(event_name="push", ref="refs/heads/release/2.x")

        assert classify_trigger(ctx) == BranchTrigger(name="release/2.x")

    def test_pull_request(self) -> None:
        ctx = EventContext(
            event_name="pull_request",
            ref="refs/pull/123/merge",
            head_ref="feature-branch",
            base_ref="main",
        )

        assert classify_trigger(ctx) == PullRequestTrigger(
            head="feature-branch",
            base="main",
            ref=UnknownTrigger(ref="refs/pull/123/merge"),
        )

    def test_pull_request_without_refs(self) -> None:
        """Test that missing head/base refs become None."""
        ctx = EventContext(event_name="pull_request", ref="refs/pull/7/merge")

        assert classify_trigger(ctx) == PullRequestTrigger(
            head=None, base=None, ref=UnknownTrigger(ref="refs/pull/7/merge")
        )

    def test_pull_request_keeps_branch_ref(self) -> None:
        ctx = EventContext(event_name="pull_request", ref="refs/heads/feature")

        assert classify_trigger(ctx) == PullRequestTrigger(head=None, base=None, ref=BranchTrigger("feature"))

    def test_pull_request_keeps_tag_ref(self) -> None:
        ctx = EventContext(event_name="pull_request", ref="refs/tags/v1.0.0", head_ref="feature")

        trigger = classify_trigger(ctx)

        assert trigger == PullRequestTrigger(head="feature", base=None, ref=TagTrigger("v1.0.0"))
        assert ref_trigger(trigger) == TagTrigger("v1.0.0")

    def test_tag_ref_on_other_event(self) -> None:
        """Test that tag refs are recognised regardless of the event name."""
        ctx = EventContext(event_name="workflow_dispatch", ref="refs/tags/v2")

        assert classify_trigger(ctx) == TagTrigger(name="v2")

    @pytest.mark.parametrize("ref", ["", "refs/pull/1/merge", "refs/tags/", "abc123"])
    def test_unknown(self, ref: str) -> None:
        ctx = EventContext(event_name="push", ref=ref)

        trigger = classify_trigger(ctx)

        assert isinstance(trigger, UnknownTrigger)
        assert trigger.ref == (ref or None)


class TestClassifyRef:
    """Tests for classify_ref."""

    @pytest.mark.parametrize(
        ("ref", "expected"),
        [
            ("refs/tags/v1.0.0", TagTrigger("v1.0.0")),
            ("refs/heads/release/2.x", BranchTrigger("release/2.x")),
            ("refs/pull/3/merge", UnknownTrigger("refs/pull/3/merge")),
            (None, UnknownTrigger()),
        ],
    )
    def test_shapes(self, ref, expected) -> None:
        assert classify_ref(ref) == expected

    def test_ref_trigger_of_push_is_itself(self) -> None:
        assert ref_trigger(BranchTrigger("main")) == BranchTrigger("main")


class TestEventContext:
    """Tests for reading the CI environment."""

    def test_reads_github_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
        monkeypatch.setenv("GITHUB_REF", "refs/pull/123/merge")
        monkeypatch.setenv("GITHUB_HEAD_REF", "feature-branch")
        monkeypatch.setenv("GITHUB_BASE_REF", "main")

        ctx = EventContext()

        assert ctx.event_kind == EventKind.PULL_REQUEST
        assert classify_trigger(ctx) == PullRequestTrigger(
            head="feature-branch",
            base="main",
            ref=UnknownTrigger(ref="refs/pull/123/merge"),
        )

    def test_defaults_outside_ci(self) -> None:
        ctx = EventContext()

        assert ctx.event_kind == EventKind.OTHER
        assert classify_trigger(ctx) == UnknownTrigger()

    @pytest.mark.parametrize(
        "name,kind",
        [("push", EventKind.PUSH), ("pull_request", EventKind.PULL_REQUEST), ("schedule", EventKind.OTHER)],
    )
    def test_event_kind(self, name: str, kind: EventKind) -> None:
        assert EventKind.from_event_name(name) == kind
