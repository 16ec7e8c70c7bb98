"""Issue references and commit type hints from branch names."""
import re
from typing import Optional

from .models import CommitType, IssueReference, TrackerKind

BRANCH_TYPE_PREFIXES = {
    'feature': CommitType.FEAT,
    'feat': CommitType.FEAT,
    'fix': CommitType.FIX,
    'bugfix': CommitType.FIX,
    'hotfix': CommitType.FIX,
    'docs': CommitType.DOCS,
    'doc': CommitType.DOCS,
    'refactor': CommitType.REFACTOR,
    'perf': CommitType.PERF,
    'test': CommitType.TEST,
    'tests': CommitType.TEST,
    'chore': CommitType.CHORE,
    'build': CommitType.BUILD,
    'ci': CommitType.CI,
    'style': CommitType.STYLE,
    'revert': CommitType.REVERT,
}

_GITHUB_ID = re.compile(r'(?:#|(?:^|[/_-])(?:gh|issues?)[-_]?)(\d+)(?![\w])', re.IGNORECASE)
_GITLAB_ID = re.compile(r'(?:^|[/_-])gl[-_]?(\d+)(?![\w])', re.IGNORECASE)
_JIRA_KEY = re.compile(r'(?<![A-Za-z0-9])([A-Z][A-Z0-9]+-\d+)(?!\d)')
_LINEAR_KEY = re.compile(r'(?<![A-Za-z0-9])([a-z]{2,5}-\d+)(?!\d)')


def branch_type_hint(branch: str) -> Optional[CommitType]:
    """Map the first branch segment (``feature/``, ``fix/``...) to a commit type."""
    if '/' not in branch:
        return None
    prefix = branch.split('/', 1)[0].lower()
    return BRANCH_TYPE_PREFIXES.get(prefix)


def _find_id(branch: str, tracker: Optional[TrackerKind]):
    if tracker in (None, TrackerKind.GITHUB, TrackerKind.GITLAB):
        if tracker != TrackerKind.GITHUB:
            match = _GITLAB_ID.search(branch)
            if match:
                return f"#{match.group(1)}", TrackerKind.GITLAB
        match = _GITHUB_ID.search(branch)
        if match:
            return f"#{match.group(1)}", tracker or TrackerKind.GITHUB
        if tracker is not None:
            return None

    match = _JIRA_KEY.search(branch)
    if match:
        return match.group(1), tracker or TrackerKind.JIRA

    # lower-case slugs ("node-18", "utf-8") look like Linear keys, so only when asked
    if tracker == TrackerKind.LINEAR:
        match = _LINEAR_KEY.search(branch)
        if match:
            return match.group(1).upper(), TrackerKind.LINEAR

    return None


def resolve_issue(branch: Optional[str], tracker: Optional[str] = None) -> Optional[IssueReference]:
    """Extract an issue reference from a branch name.

    Args:
        branch: Current branch name, or None when HEAD is detached
        tracker: Optional tracker name forcing how ids are interpreted
            ("jira", "github", "linear", "gitlab"); "auto" or None detects it

    Returns:
        Optional[IssueReference]: None when the branch carries neither an
        issue id nor a type prefix. A prefix alone gives a reference with
        tracker kind ``none``.
    """
    if not branch or not branch.strip():
        return None
    branch = branch.strip()

    kind = None
    if tracker and tracker != 'auto':
        try:
            kind = TrackerKind(tracker.lower())
        except ValueError:
            kind = None
        if kind == TrackerKind.NONE:
            kind = None

    type_hint = branch_type_hint(branch)
    found = _find_id(branch, kind)
    if found:
        issue_id, tracker_kind = found
        return IssueReference(id=issue_id, tracker_kind=tracker_kind, type_hint=type_hint)
    if type_hint:
        return IssueReference(type_hint=type_hint)
    return None
