"""Base command class for git operations.

Commands wrap one git operation each, report to observers, and can be
undone where git allows it.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from git import Repo
from rich.console import Console

from ..models import CommitUnit
from ..observers import GitOperationObserver


class GitCommand(ABC):
    """Abstract base class for git commands.

    Attributes:
        repo (Repo): The git repository to operate on
        console (Console): Rich console for output
        observers (List[GitOperationObserver]): Observers notified after execution
    """

    def __init__(self, repo: Repo, console: Optional[Console] = None):
        self.repo = repo
        self.console = console or Console()
        self.observers: List[GitOperationObserver] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        if observer not in self.observers:
            self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        self.observers.remove(observer)

    async def _notify_commit(self, commit_unit: CommitUnit) -> None:
        for observer in self.observers:
            await observer.on_commit_created(commit_unit)

    async def _notify_push(self, success: bool, branch: Optional[str]) -> None:
        for observer in self.observers:
            await observer.on_push_completed(success, branch)

    @abstractmethod
    async def execute(self) -> bool:
        """Execute the git command.

        Returns:
            bool: True if the command was executed successfully, False otherwise
        """
        pass

    @abstractmethod
    async def undo(self) -> bool:
        """Undo the git command.

        Returns:
            bool: True if the command was undone successfully, False otherwise
        """
        pass
