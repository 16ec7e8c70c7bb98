"""Tests for branch name issue resolution."""
import pytest

from commitgen.issues import branch_type_hint, resolve_issue
from commitgen.models import CommitType, TrackerKind


@pytest.mark.parametrize("branch,expected", [
    ("feature/login", CommitType.FEAT),
    ("feat/login", CommitType.FEAT),
    ("fix/crash", CommitType.FIX),
    ("bugfix/crash", CommitType.FIX),
    ("hotfix/crash", CommitType.FIX),
    ("docs/readme", CommitType.DOCS),
    ("Refactor/core", CommitType.REFACTOR),
    ("chore/deps", CommitType.CHORE),
    ("release/1.0", None),
    ("main", None),
])
def test_branch_type_hint(branch, expected):
    assert branch_type_hint(branch) == expected


def test_jira_key_with_type_prefix():
    issue = resolve_issue("feature/PROJ-123-user-login")
    assert issue.id == "PROJ-123"
    assert issue.tracker_kind == TrackerKind.JIRA
    assert issue.type_hint == CommitType.FEAT


def test_github_number():
    issue = resolve_issue("fix/#42-null-pointer")
    assert issue.id == "#42"
    assert issue.tracker_kind == TrackerKind.GITHUB
    assert issue.type_hint == CommitType.FIX


@pytest.mark.parametrize("branch", ["issue-42", "fix/gh-42", "issue_42"])
def test_github_number_forms(branch):
    issue = resolve_issue(branch)
    assert issue.id == "#42"
    assert issue.tracker_kind == TrackerKind.GITHUB


def test_gitlab_number():
    issue = resolve_issue("feature/gl-17-pipeline")
    assert issue.id == "#17"
    assert issue.tracker_kind == TrackerKind.GITLAB


def test_linear_key_needs_linear_tracker():
    issue = resolve_issue("eng-7-fix-sync", tracker="linear")
    assert issue.id == "ENG-7"
    assert issue.tracker_kind == TrackerKind.LINEAR
    assert issue.type_hint is None


@pytest.mark.parametrize("branch", ["chore/node-18", "fix/utf-8-decoding", "feature/oauth-2", "eng-7-fix-sync"])
def test_lowercase_slugs_are_not_issue_ids(branch):
    issue = resolve_issue(branch)
    assert issue is None or issue.id == ""
    if issue is not None:
        assert issue.tracker_kind == TrackerKind.NONE



def test_prefix_without_issue():
    """Test that a type prefix alone still yields a hint."""
    issue = resolve_issue("feature/new-login-page")
    assert issue is not None
    assert issue.id == ""
    assert issue.tracker_kind == TrackerKind.NONE
    assert issue.type_hint == CommitType.FEAT


@pytest.mark.parametrize("branch", ["main", "develop", "", "   ", None])
def test_no_issue(branch):
    assert resolve_issue(branch) is None


def test_tracker_override_forces_kind():
    issue = resolve_issue("feature/ABC-9-thing", tracker="linear")
    assert issue.id == "ABC-9"
    assert issue.tracker_kind == TrackerKind.LINEAR


def test_github_tracker_ignores_jira_keys():
    issue = resolve_issue("feature/ABC-9-thing", tracker="github")
    assert issue.tracker_kind == TrackerKind.NONE
    assert issue.type_hint == CommitType.FEAT


def test_auto_tracker_detects():
    assert resolve_issue("PROJ-1", tracker="auto").tracker_kind == TrackerKind.JIRA


def test_unknown_tracker_falls_back_to_detection():
    assert resolve_issue("PROJ-1", tracker="bugzilla").tracker_kind == TrackerKind.JIRA
