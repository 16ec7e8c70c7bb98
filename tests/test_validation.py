"""Tests for commit message validation."""
from commitgen.commit_message import CommitMessageValidator
from commitgen.commit_message.validation import (
    BlankLineHandler,
    ConventionalFormatHandler,
    EmptyMessageHandler,
    SubjectLengthHandler,
    create_validation_chain,
)
from commitgen.models import CommitMessage, CommitType


def test_empty_message_handler():
    handler = EmptyMessageHandler()

    is_valid, msg = handler.validate("")
    assert not is_valid
    assert "Empty commit message" in msg

    is_valid, msg = handler.validate("   \n  ")
    assert not is_valid

    is_valid, msg = handler.validate("feat: add feature")
    assert is_valid


def test_subject_length_handler():
    handler = SubjectLengthHandler(max_length=10)

    is_valid, msg = handler.validate("This is way too long")
    assert not is_valid
    assert "Subject line too long" in msg

    assert handler.validate("1234567890")[0]
    assert handler.validate("short")[0]


def test_conventional_format_handler():
    handler = ConventionalFormatHandler()

    is_valid, msg = handler.validate("bad format")
    assert not is_valid
    assert "must follow format" in msg

    assert handler.validate("feat: good format")[0]
    assert handler.validate("fix(parser): handle tabs")[0]
    assert handler.validate("refactor(api)!: drop v1")[0]
    assert not handler.validate("feature: not a type")[0]
    assert not handler.validate("feat:missing space")[0]


def test_blank_line_handler():
    handler = BlankLineHandler()

    is_valid, msg = handler.validate("feat: add feature\nNo blank line")
    assert not is_valid
    assert "blank line after subject" in msg

    assert handler.validate("feat: add feature\n\nWith blank line")[0]


def test_validation_chain_stops_at_first_failure():
    chain = create_validation_chain(max_subject_length=20)

    is_valid, msg = chain.handle("")
    assert not is_valid
    assert "Empty" in msg

    is_valid, msg = chain.handle("feat: this subject is far too long")
    assert not is_valid
    assert "too long" in msg

    assert chain.handle("feat: short")[0]


def test_validator_allows_trailing_period():
    validator = CommitMessageValidator()
    assert validator.validate("fix: Handle null input.")[0]


def test_validate_candidate_renders_message():
    validator = CommitMessageValidator()

    candidate = CommitMessage(type=CommitType.FEAT, scope="api", subject="add users", body="Details.")
    assert validator.validate_candidate(candidate) == (True, "")

    blank = CommitMessage(type=CommitType.FEAT, subject="   ")
    assert not validator.validate_candidate(blank)[0]

    long_subject = CommitMessage(type=CommitType.FEAT, subject="x" * 80)
    assert not validator.validate_candidate(long_subject)[0]
