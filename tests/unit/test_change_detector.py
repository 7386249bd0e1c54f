"""Unit tests for ChangeDetector decision logic."""

from unittest.mock import Mock

import pytest

from monorepo_push.engine.change_detector import ChangeDetector, any_under
from monorepo_push.exceptions import GitOperationError
from monorepo_push.git.refs import BranchTrigger, PullRequestTrigger, TagTrigger, UnknownTrigger


class TestAnyUnder:
    """Tests for the literal prefix match."""

    def test_file_inside_directory(self) -> None:
        assert any_under(["packages/frontend/app.js"], "packages/frontend")

    def test_sibling_with_common_prefix(self) -> None:
        """Test that api does not match api-docs."""
        assert not any_under(["api-docs/index.md"], "api")

    def test_directory_entry_itself_does_not_match(self) -> None:
        assert not any_under(["api"], "api")

    def test_regex_metacharacters_are_literal(self) -> None:
        """Test that a dot in the directory name only matches a dot."""
        assert not any_under(["libxv1/a.py"], "lib.v1")
        assert any_under(["lib.v1/a.py"], "lib.v1")

    def test_trailing_slash_is_ignored(self) -> None:
        assert any_under(["api/main.py"], "api/")

    def test_empty_list(self) -> None:
        assert not any_under([], "api")


class TestPushDetection:
    """Tests for branch pushes and unknown triggers."""

    def test_change_against_parent(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.return_value = ["packages/frontend/Component.tsx"]

        detector = ChangeDetector(mock_repo)

        assert detector.detect_changes("packages/frontend", BranchTrigger("main"))
        mock_repo.changed_paths.assert_called_once_with("HEAD^", "HEAD")
        mock_repo.fetch.assert_not_called()

    def test_no_change_against_parent(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.return_value = ["packages/backend/server.py", "README.md"]

        assert not ChangeDetector(mock_repo).detect_changes("packages/frontend", BranchTrigger("main"))

    def test_unknown_trigger_uses_parent(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.return_value = ["api/x.py"]

        assert ChangeDetector(mock_repo).detect_changes("api", UnknownTrigger())
        mock_repo.changed_paths.assert_called_once_with("HEAD^", "HEAD")

    def test_diff_failure_propagates(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.side_effect = GitOperationError("Could not compare HEAD^ with HEAD")

        with pytest.raises(GitOperationError):
            ChangeDetector(mock_repo).detect_changes("api", BranchTrigger("main"))


class TestFirstCommitDetection:
    """Tests for a HEAD without parent."""

    def test_directory_with_files(self, mock_repo: Mock) -> None:
        mock_repo.has_parent.return_value = False
        mock_repo.list_paths.return_value = ["api/main.py", "README.md"]

        assert ChangeDetector(mock_repo).detect_changes("api", BranchTrigger("main"))
        mock_repo.changed_paths.assert_not_called()

    def test_directory_without_files(self, mock_repo: Mock) -> None:
        mock_repo.has_parent.return_value = False
        mock_repo.list_paths.return_value = ["README.md"]

        assert not ChangeDetector(mock_repo).detect_changes("api", BranchTrigger("main"))


class TestTagDetection:
    """Tests for tag pushes."""

    def test_tag_with_files(self, mock_repo: Mock) -> None:
        mock_repo.list_paths.return_value = ["packages/frontend/app.js"]

        assert ChangeDetector(mock_repo).detect_changes("packages/frontend", TagTrigger("v1.0.0"))
        mock_repo.changed_paths.assert_not_called()
        mock_repo.has_parent.assert_not_called()

    def test_tag_without_files(self, mock_repo: Mock) -> None:
        mock_repo.list_paths.return_value = ["packages/backend/server.py"]

        assert not ChangeDetector(mock_repo).detect_changes("packages/frontend", TagTrigger("v1.0.0"))


class TestPullRequestDetection:
    """Tests for pull request events."""

    def test_diff_against_fetched_base(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.return_value = ["api/handler.py"]

        detector = ChangeDetector(mock_repo)

        assert detector.detect_changes("api", PullRequestTrigger(head="feature-branch", base="main"))
        mock_repo.fetch.assert_called_once_with("origin", "main")
        mock_repo.changed_paths.assert_called_once_with("origin/main", "HEAD")

    def test_fetch_failure_falls_back_to_parent(self, mock_repo: Mock) -> None:
        mock_repo.fetch.side_effect = GitOperationError("Could not fetch main from origin", stderr="no remote")
        mock_repo.changed_paths.return_value = ["api/handler.py"]

        assert ChangeDetector(mock_repo).detect_changes("api", PullRequestTrigger(head="f", base="main"))
        mock_repo.changed_paths.assert_called_once_with("HEAD^", "HEAD")

    def test_missing_base_uses_push_path(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.return_value = []

        assert not ChangeDetector(mock_repo).detect_changes("api", PullRequestTrigger(head="f", base=None))
        mock_repo.fetch.assert_not_called()
        mock_repo.changed_paths.assert_called_once_with("HEAD^", "HEAD")

    def test_missing_base_on_tag_ref_checks_presence(self, mock_repo: Mock) -> None:
        mock_repo.list_paths.return_value = ["api/main.py"]
        trigger = PullRequestTrigger(head="feature", base=None, ref=TagTrigger("v1.0.0"))

        assert ChangeDetector(mock_repo).detect_changes("api", trigger)
        mock_repo.list_paths.assert_called_once_with("HEAD")
        mock_repo.changed_paths.assert_not_called()
        mock_repo.fetch.assert_not_called()

    def test_base_wins_over_tag_ref(self, mock_repo: Mock) -> None:
        mock_repo.changed_paths.return_value = ["api/handler.py"]
        trigger = PullRequestTrigger(head="feature", base="main", ref=TagTrigger("v1.0.0"))

        assert ChangeDetector(mock_repo).detect_changes("api", trigger)
        mock_repo.changed_paths.assert_called_once_with("origin/main", "HEAD")
        mock_repo.list_paths.assert_not_called()

    def test_custom_remote(self, mock_repo: Mock) -> None:
        ChangeDetector(mock_repo, remote="upstream").detect_changes("api", PullRequestTrigger(head=None, base="dev"))

        mock_repo.fetch.assert_called_once_with("upstream", "dev")
        mock_repo.changed_paths.assert_called_once_with("upstream/dev", "HEAD")


def test_detection_never_mutates(mock_repo: Mock) -> None:
    """Test that detection does not touch branches, remotes or config."""
    mock_repo.changed_paths.return_value = ["api/x"]

    ChangeDetector(mock_repo).detect_changes("api", BranchTrigger("main"))

    mock_repo.delete_branch.assert_not_called()
    mock_repo.add_remote.assert_not_called()
    mock_repo.remove_remote.assert_not_called()
    mock_repo.set_config.assert_not_called()
    mock_repo.subtree_split.assert_not_called()
