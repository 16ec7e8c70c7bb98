"""Commit message validation."""
from typing import Tuple

from ..models import CommitMessage
from .validation import create_validation_chain

class CommitMessageValidator:
    """Validates commit messages against conventional commit standards."""

    def __init__(self, max_subject_length: int = 72):
        self.max_subject_length = max_subject_length
        self.validation_chain = create_validation_chain(max_subject_length)

    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate a commit message against standards."""
        return self.validation_chain.handle(message)

    def validate_candidate(self, candidate: CommitMessage) -> Tuple[bool, str]:
        """Validate a structured candidate by rendering it first."""
        if not candidate.is_valid:
            return False, "Empty commit message"
        return self.validate(candidate.render())
