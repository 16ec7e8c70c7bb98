"""Factory classes for creating commit message strategies."""
import os
from abc import ABC, abstractmethod
from typing import Optional

from .commit_message import (
    AgentCommitStrategy,
    CommitMessageStrategy,
    OllamaCommitStrategy,
    RuleBasedStrategy,
)
from .commit_message.strategy import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL

PROVIDERS = ("google", "anthropic", "local")

class StrategyFactory(ABC):
    """Abstract factory for commit message strategies."""

    @abstractmethod
    def create_commit_strategy(self) -> CommitMessageStrategy:
        """Create a strategy for generating commit messages."""
        pass

def _export_api_key(api_key: Optional[str], *env_vars: str) -> None:
    # pydantic-ai reads provider keys from the environment
    if api_key:
        for env_var in env_vars:
            os.environ[env_var] = api_key

class GoogleStrategyFactory(StrategyFactory):
    """Factory for Google Gemini strategies."""

    def __init__(self, model: str = 'gemini-2.5-flash', api_key: Optional[str] = None):
        self.model = model
        self.api_key = api_key

    def create_commit_strategy(self) -> CommitMessageStrategy:
        _export_api_key(self.api_key, "GEMINI_API_KEY", "GOOGLE_API_KEY")
        model = self.model.replace('google:', '', 1) if self.model.startswith('google:') else self.model
        return AgentCommitStrategy(model=model if model.startswith("google-gla:") else f"google-gla:{model}")

class AnthropicStrategyFactory(StrategyFactory):
    """Factory for Anthropic Claude strategies."""

    def __init__(self, model: str = 'claude-3-5-sonnet-latest', api_key: Optional[str] = None):
        self.model = model
        self.api_key = api_key

    def create_commit_strategy(self) -> CommitMessageStrategy:
        _export_api_key(self.api_key, "ANTHROPIC_API_KEY")
        return AgentCommitStrategy(model=self.model if self.model.startswith("anthropic:") else f"anthropic:{self.model}")

class OllamaStrategyFactory(StrategyFactory):
    """Factory for local Ollama strategies."""

    def __init__(self, model: str = DEFAULT_OLLAMA_MODEL, base_url: str = DEFAULT_OLLAMA_URL):
        self.model = model
        self.base_url = base_url

    def create_commit_strategy(self) -> CommitMessageStrategy:
        model_name = self.model.replace('ollama:', '', 1) if self.model.startswith('ollama:') else self.model
        return OllamaCommitStrategy(model_name=model_name, base_url=self.base_url)

class RuleBasedStrategyFactory(StrategyFactory):
    """Factory used when AI generation is disabled."""

    def create_commit_strategy(self) -> CommitMessageStrategy:
        return RuleBasedStrategy()

def get_strategy_factory(
    provider: str = "google",
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: str = DEFAULT_OLLAMA_URL,
) -> StrategyFactory:
    """Get the appropriate strategy factory for a provider.

    A model prefix ("anthropic:", "claude-", "ollama:", "gemini-") takes
    precedence over the configured provider.

    Raises:
        ValueError: If the provider is unknown
    """
    model = model or None
    if model:
        if model.startswith("anthropic:") or model.startswith("claude-"):
            provider = "anthropic"
        elif model.startswith("ollama:"):
            provider = "local"
        elif model.startswith("google") or model.startswith("gemini-"):
            provider = "google"

    if provider == "google":
        return GoogleStrategyFactory(model=model, api_key=api_key) if model else GoogleStrategyFactory(api_key=api_key)
    if provider == "anthropic":
        return AnthropicStrategyFactory(model=model, api_key=api_key) if model else AnthropicStrategyFactory(api_key=api_key)
    if provider == "local":
        return OllamaStrategyFactory(model=model or DEFAULT_OLLAMA_MODEL, base_url=base_url)
    raise ValueError(f"Unknown provider '{provider}'. Choose one of: {', '.join(PROVIDERS)}")
