"""Publishing the extracted history to the target repository.

The target repository is registered under a fixed temporary remote name and
the temporary branch is pushed with ``--force-with-lease``. The target
branch is fetched first so the lease has a remote-tracking ref to compare
against: the push is rejected if the remote tip moved after that fetch.

Known limitation: there is a window between the fetch and the push in
which a concurrent push is not detected.
"""

import structlog

from monorepo_push.exceptions import GitOperationError
from monorepo_push.git.exceptions import PublishError
from monorepo_push.git.models import RemoteTarget
from monorepo_push.git.repository import GitRepository

log = structlog.get_logger(__name__)

TEMP_REMOTE_NAME = "target-repo"


def destination_ref(target_branch: str) -> str:
    """Fully qualified ref to push to, so git never has to guess branch vs tag."""
    if target_branch.startswith("refs/"):
        return target_branch
    return f"refs/heads/{target_branch}"


class RemotePublisher:
    """Register the target remote and push the extracted branch to it."""

    def __init__(self, repo: GitRepository, remote_name: str = TEMP_REMOTE_NAME) -> None:
        """Initialize publisher.

        Args:
            repo: Local repository
            remote_name: Name to register the target remote under
        """
        self.repo = repo
        self.remote_name = remote_name

    def setup_remote(self, target: RemoteTarget) -> str:
        """Register ``target`` under the temporary remote name.

        An existing registration of that name is replaced.

        Returns:
            The remote name

        Raises:
            PublishError: If the remote cannot be registered
        """
        log.info("remote_setup_started", remote=target.redacted, remote_name=self.remote_name)

        try:
            if self.repo.remote_exists(self.remote_name):
                log.warning("remote_exists", remote_name=self.remote_name, action="removing")
                self.repo.remove_remote(self.remote_name)
            self.repo.add_remote(self.remote_name, target.url)
        except GitOperationError as e:
            log.error("remote_setup_failed", remote=target.redacted, error=e.stderr or e.message)
            raise PublishError(
                f"Failed to add remote: {target.redacted}",
                remote_name=self.remote_name,
                stderr=e.stderr,
            ) from e

        log.info("remote_configured", remote=target.redacted, remote_name=self.remote_name)
        return self.remote_name

    def publish(self, remote_name: str, temp_branch: str, target_branch: str) -> None:
        """Push ``temp_branch`` to ``target_branch`` on ``remote_name``.

        Raises:
            PublishError: If the push fails for any reason (authentication,
                network, branch protection, stale lease)
        """
        log.info(
            "push_started",
            remote_name=remote_name,
            temp_branch=temp_branch,
            target_branch=target_branch,
        )

        try:
            self.repo.fetch(remote_name, target_branch)
        except GitOperationError:
            log.warning("target_branch_missing", target_branch=target_branch, action="will_create")

        try:
            self.repo.push_with_lease(remote_name, temp_branch, destination_ref(target_branch))
        except GitOperationError as e:
            log.error(
                "push_failed",
                remote_name=remote_name,
                target_branch=target_branch,
                error=e.stderr or e.message,
            )
            raise PublishError(
                f"Failed to push to {remote_name}",
                remote_name=remote_name,
                target_branch=target_branch,
                stderr=e.stderr,
            ) from e

        log.info("push_completed", target_branch=target_branch)
