"""Turn raw git output into a :class:`GitAnalysis`.

Both inputs are produced by the repository reader in ``core``; this module
only parses strings and never touches git itself.
"""
import re
from typing import List, Optional, Tuple

from .models import GitAnalysis

# "path/to/file.py | 12 +++---" -> "path/to/file.py"
_STAT_LINE = re.compile(r'^\s*(.+?)\s+\|')
_ADDED_LINE = re.compile(r'^\+(?!\+)', re.MULTILINE)
_REMOVED_LINE = re.compile(r'^-(?!-)', re.MULTILINE)


def parse_stat_files(stat_output: Optional[str]) -> List[str]:
    """Extract changed paths from ``git diff --stat`` output.

    Header and summary lines ("3 files changed, ...") have no ``|`` and are
    skipped.
    """
    files = []
    for line in (stat_output or "").splitlines():
        match = _STAT_LINE.match(line)
        if match:
            files.append(match.group(1))
    return files


def count_line_changes(diff_output: Optional[str]) -> Tuple[int, int]:
    """Count added and removed lines, ignoring ``+++``/``---`` headers."""
    diff_output = diff_output or ""
    additions = len(_ADDED_LINE.findall(diff_output))
    deletions = len(_REMOVED_LINE.findall(diff_output))
    return additions, deletions


def analyze(stat_output: Optional[str], diff_output: Optional[str], has_unstaged: bool = False) -> GitAnalysis:
    """Build a :class:`GitAnalysis` from the staged stat summary and diff."""
    additions, deletions = count_line_changes(diff_output)
    return GitAnalysis(
        files_changed=parse_stat_files(stat_output),
        additions=additions,
        deletions=deletions,
        has_staged=bool((stat_output or "").strip()),
        has_unstaged=bool(has_unstaged),
        diff=diff_output or "",
    )
