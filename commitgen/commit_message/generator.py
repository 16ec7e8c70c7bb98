"""Commit message generation with validation and fallback."""
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import CommitMessage, GitAnalysis
from ..suggester import MAX_SUGGESTIONS
from .strategy import CommitMessageStrategy, RuleBasedStrategy
from .validator import CommitMessageValidator

@dataclass
class GenerationResult:
    """Candidates plus where they came from."""
    messages: List[CommitMessage] = field(default_factory=list)
    source: str = ""
    used_fallback: bool = False
    error: Optional[str] = None

class CommitMessageGenerator:
    """Runs a strategy, drops invalid candidates and falls back to rules.

    The fallback strategy is the rule-based one unless another is given; it
    always yields at least one candidate.
    """

    def __init__(
        self,
        strategy: Optional[CommitMessageStrategy] = None,
        fallback: Optional[CommitMessageStrategy] = None,
        validator: Optional[CommitMessageValidator] = None,
    ):
        self.fallback = fallback or RuleBasedStrategy()
        self.strategy = strategy or self.fallback
        self.validator = validator or CommitMessageValidator()

    def _valid(self, candidates: List[CommitMessage]) -> List[CommitMessage]:
        return [c for c in candidates if self.validator.validate_candidate(c)[0]][:MAX_SUGGESTIONS]

    async def generate(self, analysis: GitAnalysis) -> GenerationResult:
        """Generate candidates for ``analysis``."""
        error = None
        if self.strategy is not self.fallback:
            try:
                candidates = self._valid(await self.strategy.generate_messages(analysis))
                if candidates:
                    return GenerationResult(messages=candidates, source=self.strategy.name)
                error = "No valid suggestions generated"
            except Exception as e:
                # Any provider failure (network, auth, parsing) falls back to rules
                error = str(e) or e.__class__.__name__

        candidates = await self.fallback.generate_messages(analysis)
        return GenerationResult(
            messages=candidates[:MAX_SUGGESTIONS],
            source=self.fallback.name,
            used_fallback=self.strategy is not self.fallback,
            error=error,
        )
