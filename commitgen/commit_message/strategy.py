"""Commit message generation strategies."""

import json
import re
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx
from pydantic import ValidationError
from pydantic_ai import Agent

from ..models import CommitMessage, GitAnalysis
from ..prompts import COMMIT_MESSAGE_PROMPT, JSON_OUTPUT_INSTRUCTIONS, build_analysis_prompt
from ..suggester import MAX_SUGGESTIONS, suggest

DEFAULT_AGENT_MODEL = "google-gla:gemini-2.5-flash"
DEFAULT_OLLAMA_MODEL = "qwen2.5-coder:7b"
DEFAULT_OLLAMA_URL = "http://localhost:11434"

_JSON_ARRAY = re.compile(r'\[[\s\S]*\]')


def parse_candidates(text: str) -> List[CommitMessage]:
    """Extract commit candidates from a model reply containing a JSON array.

    Raises:
        ValueError: If the reply holds no parseable JSON array
    """
    match = _JSON_ARRAY.search(text or "")
    if not match:
        raise ValueError("Failed to parse AI response")
    try:
        items = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse AI response: {e}") from e
    if not isinstance(items, list):
        raise ValueError("Failed to parse AI response: expected a JSON array")

    candidates = []
    for item in items:
        if not isinstance(item, dict):
            continue
        if isinstance(item.get('type'), str):
            item = {**item, 'type': item['type'].strip().lower()}
        try:
            candidates.append(CommitMessage.model_validate(item))
        except ValidationError:
            continue
    return candidates


class CommitMessageStrategy(ABC):
    """Abstract base class for commit message generation strategies.

    Every strategy returns :class:`CommitMessage` candidates, so candidates
    from a model and from the rule-based fallback are interchangeable.
    """

    name: str = "strategy"

    @abstractmethod
    async def generate_messages(self, analysis: GitAnalysis) -> List[CommitMessage]:
        """Generate commit message candidates for the staged changes."""
        pass


class AgentCommitStrategy(CommitMessageStrategy):
    """Strategy backed by a pydantic-ai agent.

    The agent is created on first use so a missing API key surfaces as a
    generation failure, which the generator turns into a fallback.
    """

    def __init__(self, model: str = DEFAULT_AGENT_MODEL, agent: Optional[Agent] = None):
        self.model = model
        self.name = model
        self._agent = agent

    @property
    def agent(self) -> Agent:
        if self._agent is None:
            self._agent = Agent(
                model=self.model,
                output_type=List[CommitMessage],
                system_prompt=COMMIT_MESSAGE_PROMPT,
            )
        return self._agent

    async def generate_messages(self, analysis: GitAnalysis) -> List[CommitMessage]:
        result = await self.agent.run(build_analysis_prompt(analysis))
        if not result:
            return []

        # Handle different result structures
        if hasattr(result, "output"):
            result = result.output
        elif hasattr(result, "data"):
            result = result.data

        if isinstance(result, CommitMessage):
            result = [result]
        return [
            item if isinstance(item, CommitMessage) else CommitMessage.model_validate(item)
            for item in (result or [])
        ][:MAX_SUGGESTIONS]


class OllamaCommitStrategy(CommitMessageStrategy):
    """Strategy for generating commit messages with a local Ollama model."""

    def __init__(
        self,
        model_name: str = DEFAULT_OLLAMA_MODEL,
        base_url: str = DEFAULT_OLLAMA_URL,
        timeout: float = 60.0,
    ):
        self.model_name = model_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.name = f"ollama:{model_name}"

    async def generate_messages(self, analysis: GitAnalysis) -> List[CommitMessage]:
        url = f"{self.base_url}/api/chat"

        messages = [
            {"role": "system", "content": COMMIT_MESSAGE_PROMPT + "\n" + JSON_OUTPUT_INSTRUCTIONS},
            {"role": "user", "content": build_analysis_prompt(analysis)},
        ]

        payload = {"model": self.model_name, "messages": messages, "stream": False}

        async with httpx.AsyncClient() as client:
            response = await client.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
            content = result.get("message", {}).get("content", "")

        return parse_candidates(content)[:MAX_SUGGESTIONS]


class RuleBasedStrategy(CommitMessageStrategy):
    """Deterministic strategy used without AI and as the fallback."""

    name = "rules"

    async def generate_messages(self, analysis: GitAnalysis) -> List[CommitMessage]:
        return suggest(analysis)
