"""Command for creating git commits."""

import os
import tempfile
from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console
from rich.markup import escape

from ..models import CommitUnit
from .base import GitCommand


class CommitCommand(GitCommand):
    """Command for creating a git commit.

    A unit without files commits the staged index as it is. A unit with files
    is one part of a split changeset: the index is narrowed to HEAD plus the
    staged versions of those files, committed, and then put back, so the rest
    of the changeset stays staged for the following parts. Unstaged edits in
    the working tree are never picked up.

    Attributes:
        commit_unit (CommitUnit): The message and files to commit
        commit_hash (Optional[str]): The hash of the created commit
    """

    def __init__(
        self,
        repo: Repo,
        commit_unit: CommitUnit,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        """Initialize the commit command.

        Args:
            repo: The git repository to operate on
            commit_unit: The commit unit containing files and message
            console: Optional Rich console for output
            no_verify: Skip git hooks when creating the commit
        """
        super().__init__(repo, console)
        self.commit_unit = commit_unit
        self.commit_hash: Optional[str] = None
        self.no_verify = no_verify

    def _staged_entry(self, tree: str, path: str):
        """Return ``(mode, sha)`` of ``path`` in ``tree``, or None if absent."""
        listing = self.repo.git.ls_tree(tree, "--", path)
        if not listing:
            return None
        meta = listing.splitlines()[0].split("\t", 1)[0]
        mode, _, sha = meta.split()
        return mode, sha

    def _narrow_index(self, staged_tree: str) -> None:
        """Reset the index to HEAD and stage only this unit's files."""
        if self.repo.head.is_valid():
            self.repo.git.read_tree("HEAD")
        else:
            self.repo.git.read_tree("--empty")

        for path in self.commit_unit.files:
            entry = self._staged_entry(staged_tree, path)
            if entry is None:
                self.repo.git.update_index("--force-remove", "--", path)
            else:
                mode, sha = entry
                self.repo.git.update_index("--add", "--cacheinfo", f"{mode},{sha},{path}")

    async def execute(self) -> bool:
        """Create the commit and notify observers.

        Returns:
            bool: True if the commit was created successfully, False otherwise
        """
        message = self.commit_unit.render()

        # A message file keeps multi-line messages and quotes intact
        with tempfile.NamedTemporaryFile(
            mode="w", delete=False, suffix=".commitmsg", encoding="utf-8"
        ) as f:
            f.write(message)
            temp_file = f.name

        staged_tree = None
        try:
            args = ["-F", temp_file]
            if self.no_verify:
                args.append("--no-verify")
            if self.commit_unit.files:
                staged_tree = self.repo.git.write_tree()
                self._narrow_index(staged_tree)
            self.repo.git.commit(*args)
            self.commit_hash = self.repo.head.commit.hexsha
        except GitCommandError as e:
            error = (e.stderr or e.stdout or str(e)).strip()
            self.console.print(f"[red]Failed to create commit: {escape(error)}[/red]")
            return False
        finally:
            if staged_tree is not None:
                # Back to the full staged changeset; committed files now match HEAD
                self.repo.git.read_tree(staged_tree)
            try:
                os.unlink(temp_file)
            except OSError:
                pass

        await self._notify_commit(self.commit_unit)
        return True

    async def undo(self) -> bool:
        """Undo the commit, keeping its changes staged.

        Returns:
            bool: True if the commit was undone successfully, False otherwise
        """
        if not self.commit_hash:
            self.console.print("[yellow]No commit to undo[/yellow]")
            return False

        try:
            self.repo.git.reset("--soft", "HEAD~1")
            self.commit_hash = None
            return True
        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo commit: {escape(str(e))}[/red]")
            return False
