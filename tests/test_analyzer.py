"""Tests for diff and stat parsing."""
import pytest

from commitgen.analyzer import analyze, count_line_changes, parse_stat_files


STAT = """ src/components/Button.tsx | 12 +++++++++---
 README.md                 |  2 +-
 2 files changed, 11 insertions(+), 3 deletions(-)
"""


def test_parse_stat_files():
    """Test that file paths are read from stat lines only."""
    assert parse_stat_files(STAT) == ["src/components/Button.tsx", "README.md"]


def test_parse_stat_files_handles_empty_input():
    assert parse_stat_files("") == []
    assert parse_stat_files(None) == []


def test_parse_stat_files_keeps_spaces_in_names():
    stat = " docs/my notes.md | 1 +\n 1 file changed, 1 insertion(+)\n"
    assert parse_stat_files(stat) == ["docs/my notes.md"]


def test_count_line_changes_ignores_headers():
    """Test that ``+++``/``---`` header lines are not counted."""
    assert count_line_changes("+++ a\n+foo\n-bar\n--- b\n") == (1, 1)


def test_count_line_changes_full_diff():
    diff = (
        "diff --git a/app.py b/app.py\n"
        "index 83db48f..bf269f4 100644\n"
        "--- a/app.py\n"
        "+++ b/app.py\n"
        "@@ -1,3 +1,4 @@\n"
        " import os\n"
        "-print('old')\n"
        "+print('new')\n"
        "+print('more')\n"
    )
    assert count_line_changes(diff) == (2, 1)


@pytest.mark.parametrize("diff", ["", None, "no changes here\n"])
def test_count_line_changes_without_changes(diff):
    assert count_line_changes(diff) == (0, 0)


def test_analyze_builds_analysis():
    diff = "+a\n+b\n-c\n"
    analysis = analyze(STAT, diff, has_unstaged=True)

    assert analysis.files_changed == ["src/components/Button.tsx", "README.md"]
    assert analysis.additions == 2
    assert analysis.deletions == 1
    assert analysis.has_staged is True
    assert analysis.has_unstaged is True
    assert analysis.diff == diff


def test_analyze_nothing_staged():
    analysis = analyze("", "")
    assert analysis.has_staged is False
    assert analysis.files_changed == []
    assert analysis.additions == 0
    assert analysis.deletions == 0
