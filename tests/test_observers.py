"""Tests for git operation observers."""
from unittest.mock import Mock

import pytest
from rich.console import Console

from commitgen.models import CommitMessage, CommitType, CommitUnit
from commitgen.observers import ConsoleLogObserver, FileLogObserver


@pytest.fixture
def unit():
    return CommitUnit(
        message=CommitMessage(type=CommitType.FEAT, scope="ui", subject="add [beta] badge"),
        files=["src/ui/badge.tsx", "src/ui/index.ts"],
    )


@pytest.mark.asyncio
async def test_file_observer_logs_commits_and_pushes(tmp_path, unit):
    log_file = tmp_path / "logs" / "commitgen.log"
    observer = FileLogObserver(str(log_file))

    await observer.on_commit_created(unit)
    await observer.on_push_completed(True, "main")
    await observer.on_push_completed(False)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("Created commit: feat(ui): add [beta] badge [src/ui/badge.tsx, src/ui/index.ts]")
    assert lines[1].endswith("Successfully push main to remote")
    assert lines[2].endswith("Failed to push to remote")


@pytest.mark.asyncio
async def test_console_observer_escapes_markup(unit):
    console = Mock(spec=Console)
    observer = ConsoleLogObserver(console)

    await observer.on_commit_created(unit)

    printed = console.print.call_args.args[0]
    assert "add \\[beta] badge" in printed


@pytest.mark.asyncio
async def test_console_observer_push_status():
    console = Mock(spec=Console)
    observer = ConsoleLogObserver(console)

    await observer.on_push_completed(True, "main")
    assert "Pushed changes to remote (main)" in console.print.call_args.args[0]

    await observer.on_push_completed(False)
    assert "Failed to push" in console.print.call_args.args[0]
