"""Command for pushing changes to remote repository."""

from typing import Optional

from git import GitCommandError, Repo
from git.remote import PushInfo
from rich.console import Console
from rich.markup import escape

from .base import GitCommand


class PushCommand(GitCommand):
    """Command for pushing the current branch to a remote.

    When the branch has no upstream yet, the push sets it.

    Attributes:
        remote_name (str): Name of the remote to push to
        branch (Optional[str]): Branch that was pushed
        previous_remote_sha (Optional[str]): Remote tip before the push, used by undo
    """

    def __init__(self, repo: Repo, remote_name: str = "origin", console: Optional[Console] = None):
        super().__init__(repo, console)
        self.remote_name = remote_name
        self.branch: Optional[str] = None
        self.previous_remote_sha: Optional[str] = None

    async def execute(self) -> bool:
        """Push the current branch.

        Returns:
            bool: True if the push was successful, False otherwise
        """
        success = False
        try:
            if self.remote_name not in [remote.name for remote in self.repo.remotes]:
                self.console.print(f"[red]No remote named '{escape(self.remote_name)}' configured[/red]")
            elif self.repo.head.is_detached:
                self.console.print("[red]Cannot push from a detached HEAD[/red]")
            else:
                branch = self.repo.active_branch
                self.branch = branch.name
                remote = self.repo.remote(self.remote_name)
                tracking = branch.tracking_branch()
                if tracking is not None:
                    try:
                        self.previous_remote_sha = tracking.commit.hexsha
                    except ValueError:
                        self.previous_remote_sha = None

                results = remote.push(
                    f"{branch.name}:refs/heads/{branch.name}",
                    set_upstream=tracking is None,
                )
                failed = [info for info in results if info.flags & PushInfo.ERROR]
                if failed:
                    for info in failed:
                        self.console.print(f"[red]Push rejected: {escape(info.summary.strip())}[/red]")
                else:
                    success = True
        except (GitCommandError, ValueError) as e:
            self.console.print(f"[red]Failed to push changes: {escape(str(e))}[/red]")

        await self._notify_push(success, self.branch)
        return success

    async def undo(self) -> bool:
        """Restore the remote branch to its previous tip with a forced push.

        Returns:
            bool: True if the remote branch was restored, False otherwise
        """
        if not self.branch or not self.previous_remote_sha:
            self.console.print("[yellow]No push to undo[/yellow]")
            return False

        try:
            remote = self.repo.remote(self.remote_name)
            remote.push(f"+{self.previous_remote_sha}:refs/heads/{self.branch}")
            return True
        except (GitCommandError, ValueError) as e:
            self.console.print(f"[red]Failed to undo push: {escape(str(e))}[/red]")
            return False
