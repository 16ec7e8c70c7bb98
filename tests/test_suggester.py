"""Tests for rule-based suggestions."""
import pytest

from commitgen.models import CommitType, GitAnalysis
from commitgen.suggester import MAX_SUGGESTIONS, RULES, SuggestionRule, infer_scope, suggest


def make_analysis(files, additions=0, deletions=0):
    return GitAnalysis(
        files_changed=files,
        additions=additions,
        deletions=deletions,
        has_staged=bool(files),
    )


@pytest.mark.parametrize("files,expected", [
    (["src/components/Button.tsx"], "components"),
    (["lib/auth/login.py", "lib/auth/logout.py", "lib/db/pool.py"], "auth"),
    (["README.md"], "md"),
    (["Makefile"], "makefile"),
    (["src/main.py"], "py"),
    (["api/a.py", "db/b.py"], "api"),
    ([], None),
])
def test_infer_scope(files, expected):
    assert infer_scope(files) == expected


def test_large_addition_is_feature_with_scope():
    analysis = make_analysis(["src/components/Button.tsx"], additions=45, deletions=12)
    suggestions = suggest(analysis)

    assert suggestions[0].type == CommitType.FEAT
    assert suggestions[0].scope == "components"
    assert suggestions[0].subject == "add components functionality"


def test_large_deletion_is_refactor():
    analysis = make_analysis(["src/legacy/old.py"], additions=2, deletions=80)
    suggestions = suggest(analysis)

    assert suggestions[0].type == CommitType.REFACTOR
    assert suggestions[0].subject == "remove unused legacy code"
    assert suggestions[0].scope is None


def test_small_change_does_not_trigger_size_rules():
    analysis = make_analysis(["src/app.py"], additions=10, deletions=0)
    suggestions = suggest(analysis)

    assert len(suggestions) == 1
    assert suggestions[0].type == CommitType.FEAT
    assert suggestions[0].subject == "update py"


def test_marker_rules_in_order():
    analysis = make_analysis(["tests/test_app.py", "README.md", "package.json"])
    types = [s.type for s in suggest(analysis)]
    assert types == [CommitType.TEST, CommitType.DOCS, CommitType.CHORE]


def test_fallback_without_files():
    suggestions = suggest(make_analysis([]))
    assert len(suggestions) == 1
    assert suggestions[0].subject == "update code"


def test_suggestions_are_capped():
    always = SuggestionRule("always", lambda a: True, RULES[3].build)
    suggestions = suggest(make_analysis(["x"]), rules=[always] * 8)
    assert len(suggestions) == MAX_SUGGESTIONS


@pytest.mark.parametrize("analysis", [
    make_analysis([]),
    make_analysis(["src/a.ts"], additions=100),
    make_analysis(["src/a.ts", "docs/guide.md", "config.json", "__tests__/a.test.ts"], 50, 200),
])
def test_suggest_is_bounded_and_deterministic(analysis):
    first = suggest(analysis)
    assert 1 <= len(first) <= MAX_SUGGESTIONS
    assert suggest(analysis) == first
    assert all(s.is_valid for s in first)
