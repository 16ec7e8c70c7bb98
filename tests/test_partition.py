"""Tests for splitting changesets by concern."""
import pytest

from commitgen.models import CommitType, Concern
from commitgen.partition import classify_file, partition, plan_commits


@pytest.mark.parametrize("path,concern", [
    ("src/types.ts", Concern.TYPES),
    ("src/index.d.ts", Concern.TYPES),
    ("commitgen/models.pyi", Concern.TYPES),
    ("tests/test_app.py", Concern.TEST),
    ("src/Button.test.tsx", Concern.TEST),
    ("__tests__/a.test.ts", Concern.TEST),
    ("README.md", Concern.DOCS),
    ("docs/config.json", Concern.DOCS),
    ("LICENSE", Concern.DOCS),
    ("package.json", Concern.CONFIG),
    (".github/workflows/ci.yml", Concern.CONFIG),
    ("pyproject.toml", Concern.CONFIG),
    ("src/api/users.py", Concern.API),
    ("styles/main.css", Concern.STYLE),
    ("public/logo.svg", Concern.STYLE),
    ("src/components/Button.tsx", Concern.COMPONENT),
    ("src/utils/format.ts", Concern.UTIL),
    ("src/app.py", Concern.FEATURE),
    ("data/blob.bin", Concern.OTHER),
])
def test_classify_file(path, concern):
    assert classify_file(path) == concern


def test_mixed_changeset_should_split():
    files = ["src/types.ts", "README.md", "config.json", "__tests__/a.test.ts"]
    result = partition(files)

    assert result.should_split is True
    assert [g.concern for g in result.groups] == [
        Concern.TYPES, Concern.CONFIG, Concern.TEST, Concern.DOCS,
    ]
    assert [g.suggested_order for g in result.groups] == [0, 1, 3, 4]


def test_small_changeset_should_not_split():
    result = partition(["src/a.ts", "src/b.ts"])
    assert result.should_split is False
    assert len(result.groups) == 1
    assert result.groups[0].files == ["src/a.ts", "src/b.ts"]


def test_single_concern_should_not_split():
    result = partition(["src/a.py", "src/b.py", "src/c.py", "src/d.py"])
    assert result.should_split is False


def test_three_files_should_not_split():
    result = partition(["src/types.ts", "README.md", "config.json"])
    assert result.should_split is False
    assert len(result.groups) == 3


def test_every_file_lands_in_exactly_one_group():
    files = [
        "src/types.ts", "src/app.py", "src/api/users.py", "src/utils/x.ts",
        "src/components/B.tsx", "tests/test_app.py", "README.md", "setup.cfg",
        "styles/a.css", "blob.bin", "src/app.py",
    ]
    result = partition(files)

    grouped = [f for g in result.groups for f in g.files]
    assert sorted(grouped) == sorted(set(files))
    assert len(grouped) == len(set(grouped))


def test_same_order_groups_keep_concern_order():
    result = partition(["src/utils/x.ts", "src/api/a.py", "src/components/B.tsx", "src/app.py"])
    assert [g.concern for g in result.groups] == [
        Concern.FEATURE, Concern.COMPONENT, Concern.API, Concern.UTIL,
    ]


def test_empty_changeset():
    result = partition([])
    assert result.should_split is False
    assert result.groups == []


def test_plan_commits_follows_group_order():
    result = partition(["package.json", "src/api/users.py", "docs/guide.md", "tests/auth/test_login.py"])
    plan = plan_commits(result)

    assert [unit.concern for unit in plan] == [
        Concern.CONFIG, Concern.API, Concern.TEST, Concern.DOCS,
    ]
    assert [unit.message.type for unit in plan] == [
        CommitType.CHORE, CommitType.FEAT, CommitType.TEST, CommitType.DOCS,
    ]
    assert plan[0].message.header == "chore: update configuration"
    assert plan[1].message.header == "feat(api): update api endpoints"
    assert plan[2].message.header == "test(auth): update tests for auth"
    assert plan[3].message.header == "docs: update documentation"
    assert plan[1].files == ["src/api/users.py"]


def test_plan_commits_empty_partition():
    assert plan_commits(partition([])) == []
