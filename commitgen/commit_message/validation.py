"""Commit message validation using Chain of Responsibility pattern."""
import re
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..models import CommitType

_TYPES = "|".join(t.value for t in CommitType)
CONVENTIONAL_HEADER = re.compile(rf'^(?:{_TYPES})(?:\([^()\s]+\))?!?: \S')

class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: str) -> Tuple[bool, str]:
        """Handle validation and pass to next handler if valid."""
        result = self.validate(message)
        if not result[0] or not self.next_handler:
            return result
        return self.next_handler.handle(message)

    @abstractmethod
    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate the commit message."""
        pass

class EmptyMessageHandler(ValidationHandler):
    """Validates that the message is not empty."""

    def validate(self, message: str) -> Tuple[bool, str]:
        lines = message.split('\n')
        if not lines or not lines[0].strip():
            return False, "Empty commit message"
        return True, ""

class ConventionalFormatHandler(ValidationHandler):
    """Validates the ``type(scope): subject`` header."""

    def validate(self, message: str) -> Tuple[bool, str]:
        subject = message.split('\n')[0]
        if not CONVENTIONAL_HEADER.match(subject):
            return False, "Subject line must follow format: type(scope): description"
        return True, ""

class SubjectLengthHandler(ValidationHandler):
    """Validates the subject line length."""

    def __init__(self, max_length: int = 72, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.max_length = max_length

    def validate(self, message: str) -> Tuple[bool, str]:
        subject = message.split('\n')[0]
        if len(subject) > self.max_length:
            return False, f"Subject line too long ({len(subject)} > {self.max_length})"
        return True, ""

class BlankLineHandler(ValidationHandler):
    """Validates blank line after subject."""

    def validate(self, message: str) -> Tuple[bool, str]:
        lines = message.split('\n')
        if len(lines) > 1 and lines[1] != '':
            return False, "Leave one blank line after subject"
        return True, ""

def create_validation_chain(max_subject_length: int = 72) -> ValidationHandler:
    """Create the default validation chain."""
    blank_line = BlankLineHandler()
    subject_length = SubjectLengthHandler(max_subject_length, blank_line)
    conventional = ConventionalFormatHandler(subject_length)
    empty_message = EmptyMessageHandler(conventional)

    return empty_message
