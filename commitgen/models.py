"""Shared models for commitgen."""
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel, Field

class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['CommitType']:
        """Return the matching type for a token, or None if it is not one."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

class Capitalization(str, Enum):
    LOWER = "lower"
    CAPITALIZED = "Capitalized"
    MIXED = "Mixed"

class Punctuation(str, Enum):
    WITH_PERIOD = "withPeriod"
    WITHOUT_PERIOD = "withoutPeriod"
    MIXED = "mixed"

class Concern(str, Enum):
    TYPES = "types"
    CONFIG = "config"
    FEATURE = "feature"
    COMPONENT = "component"
    API = "api"
    UTIL = "util"
    STYLE = "style"
    TEST = "test"
    DOCS = "docs"
    OTHER = "other"

class TrackerKind(str, Enum):
    JIRA = "jira"
    GITHUB = "github"
    LINEAR = "linear"
    GITLAB = "gitlab"
    NONE = "none"

@dataclass
class GitAnalysis:
    """Snapshot of a staged changeset."""
    files_changed: List[str] = field(default_factory=list)
    additions: int = 0
    deletions: int = 0
    has_staged: bool = False
    has_unstaged: bool = False
    diff: str = ""

@dataclass
class CommitLogEntry:
    subject: str
    type: Optional[CommitType] = None

class CommitMessage(BaseModel):
    """A conventional commit candidate.

    This is also the schema AI strategies must produce, so AI-sourced and
    rule-based candidates are handled the same way downstream.
    """
    type: CommitType = Field(description="Conventional commit type")
    scope: Optional[str] = Field(default=None, description="Short area of the codebase affected")
    subject: str = Field(description="Imperative summary of the change")
    body: Optional[str] = Field(default=None, description="Optional explanation of why the change was made")
    breaking: bool = Field(default=False, description="Whether the change breaks backwards compatibility")

    @property
    def is_valid(self) -> bool:
        return bool(self.type) and bool(self.subject and self.subject.strip())

    @property
    def header(self) -> str:
        header = self.type.value
        if self.scope:
            header += f"({self.scope})"
        if self.breaking:
            header += "!"
        return f"{header}: {self.subject}"

    def render(self) -> str:
        """Render the full commit message text."""
        message = self.header
        if self.body:
            message += f"\n\n{self.body}"
        if self.breaking and not (self.body and "BREAKING CHANGE:" in self.body):
            message += "\n\nBREAKING CHANGE: major version update required"
        return message

class StyleProfile(BaseModel):
    """Fingerprint of a user's historical commit style."""
    preferred_types: Dict[CommitType, float] = Field(default_factory=dict)
    avg_subject_length: float = 0.0
    capitalization: Capitalization = Capitalization.MIXED
    punctuation: Punctuation = Punctuation.MIXED
    common_phrases: List[str] = Field(default_factory=list)
    sample_size: int = 0

    @property
    def is_empty(self) -> bool:
        return self.sample_size == 0

class ConcernGroup(BaseModel):
    concern: Concern
    files: List[str] = Field(default_factory=list)
    suggested_order: int

class PartitionResult(BaseModel):
    should_split: bool = False
    groups: List[ConcernGroup] = Field(default_factory=list)

class IssueReference(BaseModel):
    id: str = ""
    tracker_kind: TrackerKind = TrackerKind.NONE
    type_hint: Optional[CommitType] = None

class CommitUnit(BaseModel):
    """A commit to create: the message plus the files it covers.

    An empty ``files`` list means "commit whatever is staged". ``text`` is a
    message typed by the user; it is committed verbatim instead of ``message``.
    """
    message: Optional[CommitMessage] = None
    text: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    concern: Optional[Concern] = None

    @property
    def description(self) -> str:
        return self.render().split("\n")[0]

    def render(self) -> str:
        if self.text is not None:
            return self.text.strip()
        if self.message is not None:
            return self.message.render()
        return ""
