"""Git operation commands using the Command Pattern.

Example:
    ```python
    from commitgen.commands import CommitCommand
    from commitgen.observers import FileLogObserver

    commit_cmd = CommitCommand(repo, commit_unit)
    commit_cmd.add_observer(FileLogObserver("commitgen.log"))
    success = await commit_cmd.execute()

    # Undo the commit if needed; its changes stay staged
    success = await commit_cmd.undo()
    ```
"""

from .base import GitCommand
from .commit import CommitCommand
from .push import PushCommand

__all__ = [
    "GitCommand",
    "CommitCommand",
    "PushCommand",
]
