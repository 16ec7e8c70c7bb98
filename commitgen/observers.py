"""Observer pattern for git operations."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import CommitUnit


class GitOperationObserver(ABC):
    """Abstract base class for git operation observers."""

    @abstractmethod
    async def on_commit_created(self, commit_unit: CommitUnit) -> None:
        """Called when a commit is created."""
        pass

    @abstractmethod
    async def on_push_completed(self, success: bool, branch: Optional[str] = None) -> None:
        """Called when a push operation completes."""
        pass


class ConsoleLogObserver(GitOperationObserver):
    """Observer that logs git operations to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_commit_created(self, commit_unit: CommitUnit) -> None:
        self.console.print(f"[green]✓ Created commit: {escape(commit_unit.description)}[/green]")

    async def on_push_completed(self, success: bool, branch: Optional[str] = None) -> None:
        target = f" ({branch})" if branch else ""
        if success:
            self.console.print(f"[green]✓ Pushed changes to remote{target}[/green]")
        else:
            self.console.print(f"[red]Failed to push changes to remote{target}[/red]")


class FileLogObserver(GitOperationObserver):
    """Observer that logs git operations to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_commit_created(self, commit_unit: CommitUnit) -> None:
        files = f" [{', '.join(commit_unit.files)}]" if commit_unit.files else ""
        await self._log(f"Created commit: {commit_unit.description}{files}")

    async def on_push_completed(self, success: bool, branch: Optional[str] = None) -> None:
        status = "Successfully" if success else "Failed to"
        target = f" {branch}" if branch else ""
        await self._log(f"{status} push{target} to remote")
