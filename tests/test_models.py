"""Tests for shared models."""
from commitgen.models import CommitMessage, CommitType, CommitUnit


def test_commit_type_parse():
    assert CommitType.parse("FEAT") == CommitType.FEAT
    assert CommitType.parse(" fix ") == CommitType.FIX
    assert CommitType.parse("feature") is None
    assert CommitType.parse(None) is None


def test_header_formats():
    assert CommitMessage(type=CommitType.FIX, subject="handle null").header == "fix: handle null"
    assert CommitMessage(type=CommitType.FEAT, scope="api", subject="add users").header == "feat(api): add users"
    assert CommitMessage(type=CommitType.FEAT, subject="drop v1", breaking=True).header == "feat!: drop v1"


def test_render_with_body():
    message = CommitMessage(type=CommitType.FEAT, subject="add users", body="Adds the users endpoint.")
    assert message.render() == "feat: add users\n\nAdds the users endpoint."


def test_render_breaking_adds_footer_once():
    message = CommitMessage(type=CommitType.REFACTOR, scope="api", subject="drop v1", breaking=True)
    assert message.render() == "refactor(api)!: drop v1\n\nBREAKING CHANGE: major version update required"

    explained = message.model_copy(update={"body": "BREAKING CHANGE: v1 routes are gone"})
    assert explained.render().count("BREAKING CHANGE:") == 1


def test_commit_unit_prefers_custom_text():
    unit = CommitUnit(
        message=CommitMessage(type=CommitType.FIX, subject="handle null"),
        text="  my own message\n\nwith body  ",
    )
    assert unit.render() == "my own message\n\nwith body"
    assert unit.description == "my own message"


def test_commit_unit_renders_message():
    unit = CommitUnit(message=CommitMessage(type=CommitType.FIX, subject="handle null"), files=["a.py"])
    assert unit.render() == "fix: handle null"
    assert unit.description == "fix: handle null"
    assert CommitUnit().render() == ""
