"""Core functionality for commitgen.

``RepositoryReader`` is the only place that reads git state, ``SuggestionPipeline``
sequences the suggestion components, and ``GitCommitter`` runs commit and push
commands.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .analyzer import analyze
from .commands import CommitCommand, GitCommand, PushCommand
from .commit_message import CommitMessageGenerator, CommitMessageStrategy
from .history import HistoryProfiler, split_subject
from .issues import resolve_issue
from .models import (
    CommitLogEntry,
    CommitMessage,
    CommitUnit,
    GitAnalysis,
    IssueReference,
    PartitionResult,
    StyleProfile,
)
from .observers import GitOperationObserver
from .partition import partition, plan_commits
from .personalizer import personalize, restyle

# Wide enough that git never shortens a path to ".../name"
STAT_WIDTH = 10000


class CommitGenError(Exception):
    """Base error for problems the user has to fix before committing."""


class NotAGitRepositoryError(CommitGenError):
    """Raised when the target directory is not inside a git repository."""


class NoStagedChangesError(CommitGenError):
    """Raised when there is nothing staged to commit."""

    def __init__(self, has_unstaged: bool = False):
        super().__init__("No staged changes found")
        self.has_unstaged = has_unstaged


@dataclass
class RepositorySnapshot:
    """Raw git output the suggestion pipeline works from."""
    stat: str = ""
    diff: str = ""
    has_unstaged: bool = False
    branch: Optional[str] = None


class RepositoryReader:
    """Reads staged changes, branch and history from a git repository."""

    def __init__(self, repo_path: str):
        try:
            self.repo = Repo(repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAGitRepositoryError(f"Not a git repository: {repo_path}") from e
        self.repo_path = repo_path

    def _git_output(self, *args: str) -> str:
        try:
            # Unquoted, untruncated paths; they are handed back to git later
            return self.repo.git(c="core.quotePath=false").diff(*args)
        except GitCommandError:
            return ""

    def staged_stat(self) -> str:
        return self._git_output("--cached", f"--stat={STAT_WIDTH}", "--no-renames")

    def staged_diff(self) -> str:
        return self._git_output("--cached", "--no-renames")

    def has_unstaged(self) -> bool:
        return bool(self._git_output("--stat").strip())

    def current_branch(self) -> Optional[str]:
        """Return the checked out branch, or None for a detached HEAD."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return None

    def recent_commits(self, max_count: int = 50) -> List[CommitLogEntry]:
        """Return the first lines of recent commit messages, newest first.

        An empty repository or a git failure gives an empty list.
        """
        try:
            commits = list(self.repo.iter_commits(max_count=max_count))
        except (GitCommandError, ValueError):
            return []

        entries = []
        for commit in commits:
            message = commit.message if isinstance(commit.message, str) else commit.message.decode("utf-8", "replace")
            subject = message.strip().split("\n")[0]
            commit_type, _ = split_subject(subject)
            entries.append(CommitLogEntry(subject=subject, type=commit_type))
        return entries

    def snapshot(self) -> RepositorySnapshot:
        return RepositorySnapshot(
            stat=self.staged_stat(),
            diff=self.staged_diff(),
            has_unstaged=self.has_unstaged(),
            branch=self.current_branch(),
        )


@dataclass
class SuggestionResult:
    """Everything the CLI needs to present suggestions."""
    analysis: GitAnalysis
    candidates: List[CommitMessage] = field(default_factory=list)
    source: str = ""
    used_fallback: bool = False
    error: Optional[str] = None
    profile: Optional[StyleProfile] = None
    issue: Optional[IssueReference] = None
    partition: Optional[PartitionResult] = None

    @property
    def commit_plan(self) -> List[CommitUnit]:
        """Partial commits for a split, personalized like the candidates."""
        if not self.partition or not self.partition.should_split:
            return []
        # partition order is the commit order, so no re-ranking here
        return [
            unit.model_copy(update={'message': restyle(unit.message, self.profile, self.issue)})
            for unit in plan_commits(self.partition)
        ]


class SuggestionPipeline:
    """Sequences analysis, generation, partitioning and personalization.

    Each optional stage is switched by a flag; a disabled stage contributes a
    neutral result.
    """

    def __init__(
        self,
        strategy: Optional[CommitMessageStrategy] = None,
        profiler: Optional[HistoryProfiler] = None,
        history_enabled: bool = True,
        multi_commit_enabled: bool = True,
        issue_tracking_enabled: bool = True,
        issue_tracker: Optional[str] = None,
    ):
        self.generator = CommitMessageGenerator(strategy)
        self.profiler = profiler
        self.history_enabled = history_enabled
        self.multi_commit_enabled = multi_commit_enabled
        self.issue_tracking_enabled = issue_tracking_enabled
        self.issue_tracker = issue_tracker

    async def run(self, snapshot: RepositorySnapshot) -> SuggestionResult:
        """Produce ranked suggestions for a snapshot.

        Raises:
            NoStagedChangesError: If nothing is staged
        """
        analysis = analyze(snapshot.stat, snapshot.diff, snapshot.has_unstaged)
        if not analysis.has_staged:
            raise NoStagedChangesError(has_unstaged=analysis.has_unstaged)

        generated = await self.generator.generate(analysis)

        profile = None
        if self.history_enabled and self.profiler is not None:
            profile = self.profiler.get_cached_profile()

        issue = None
        if self.issue_tracking_enabled:
            issue = resolve_issue(snapshot.branch, self.issue_tracker)

        split = partition(analysis.files_changed) if self.multi_commit_enabled else None

        return SuggestionResult(
            analysis=analysis,
            candidates=personalize(generated.messages, profile, issue),
            source=generated.source,
            used_fallback=generated.used_fallback,
            error=generated.error,
            profile=profile,
            issue=issue,
            partition=split,
        )


class GitCommitter:
    """Handles git operations using the Command Pattern."""

    def __init__(self, repo_path: str, no_verify: bool = False, remote_name: str = "origin",
                 console: Optional[Console] = None):
        self.repo = Repo(repo_path, search_parent_directories=True)
        self.console = console or Console()
        self.no_verify = no_verify
        self.remote_name = remote_name
        self.observers: List[GitOperationObserver] = []
        self.command_history: List[GitCommand] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        """Add an observer to be notified of git operations."""
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    async def execute_command(self, command: GitCommand) -> bool:
        """Execute a git command and store it in history if successful."""
        for observer in self.observers:
            command.add_observer(observer)

        success = await command.execute()

        if success:
            self.command_history.append(command)

        return success

    async def undo_last_command(self) -> bool:
        """Undo the last executed command."""
        if not self.command_history:
            self.console.print("[yellow]No commands to undo[/yellow]")
            return False

        command = self.command_history.pop()
        return await command.undo()

    async def commit(self, message: Union[CommitMessage, str]) -> bool:
        """Commit everything that is staged.

        A string message is committed verbatim.
        """
        if isinstance(message, str):
            unit = CommitUnit(text=message)
        else:
            unit = CommitUnit(message=message)
        command = CommitCommand(self.repo, unit, self.console, self.no_verify)
        return await self.execute_command(command)

    async def commit_changes(self, commit_units: List[CommitUnit]) -> bool:
        """Create one commit per unit, in order.

        The split is all or nothing: when a unit fails, the commits already
        made for this call are undone and the whole changeset is staged again.
        """
        created = 0
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
        ) as progress:
            task = progress.add_task("Creating commits...", total=len(commit_units))

            success = True
            for unit in commit_units:
                command = CommitCommand(self.repo, unit, self.console, self.no_verify)
                if not await self.execute_command(command):
                    success = False
                    break
                created += 1
                progress.advance(task)

        if not success and created:
            await self._rollback(created)
        return success

    async def _rollback(self, count: int) -> None:
        self.console.print(f"[yellow]Undoing {count} commit(s) from the incomplete split...[/yellow]")
        for _ in range(count):
            if not await self.undo_last_command():
                self.console.print("[red]Could not undo all commits; check git log before retrying[/red]")
                return

    async def push_changes(self) -> bool:
        """Push commits to remote repository using the Command Pattern."""
        command = PushCommand(self.repo, self.remote_name, self.console)
        return await self.execute_command(command)
