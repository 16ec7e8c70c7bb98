"""Commit message generation package."""

from .strategy import (
    CommitMessageStrategy,
    AgentCommitStrategy,
    OllamaCommitStrategy,
    RuleBasedStrategy,
)
from .generator import CommitMessageGenerator, GenerationResult
from .validator import CommitMessageValidator

__all__ = [
    'CommitMessageStrategy',
    'AgentCommitStrategy',
    'OllamaCommitStrategy',
    'RuleBasedStrategy',
    'CommitMessageGenerator',
    'GenerationResult',
    'CommitMessageValidator',
]
