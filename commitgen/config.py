"""Configuration management for commitgen."""
from pathlib import Path
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from rich.console import Console
import tomli
import tomli_w
import os
import re

DEFAULT_CONFIG_FILENAME = ".commitgen.toml"
CONFIG_SECTION = "commitgen"
ENV_PREFIX = "COMMITGEN_"

STRING_FIELDS = ['provider', 'model', 'ollama_url', 'issue_tracker', 'remote_name', 'log_file']
BOOL_FIELDS = [
    'use_ai', 'history_enabled', 'multi_commit_enabled', 'issue_tracking_enabled',
    'auto_push', 'no_verify', 'always_log',
]
INT_FIELDS = ['history_sample_size']
FLOAT_FIELDS = ['history_cache_ttl']

console = Console(stderr=True)

class Config(BaseModel):
    """Configuration settings for commitgen.

    Values come from ``.commitgen.toml`` in the repository root; settings the
    file leaves out are read from ``COMMITGEN_*`` environment variables, then
    defaults. Command line options override all of them. API keys are never
    stored here.
    """

    provider: str = Field(
        default="google",
        description="AI provider used to draft messages (google, anthropic or local)"
    )

    model: Optional[str] = Field(
        default=None,
        description="Model name for the provider (defaults to the provider's default model)"
    )

    ollama_url: str = Field(
        default="http://localhost:11434",
        description="Base URL of the Ollama server used by the local provider"
    )

    use_ai: bool = Field(
        default=True,
        description="Whether to ask the AI provider before falling back to rule-based suggestions"
    )

    history_enabled: bool = Field(
        default=True,
        description="Whether to personalize suggestions from recent commit history"
    )

    history_sample_size: int = Field(
        default=50,
        ge=1,
        description="Number of recent commits sampled for the style profile"
    )

    history_cache_ttl: float = Field(
        default=300.0,
        ge=0,
        description="Seconds a computed style profile is reused"
    )

    multi_commit_enabled: bool = Field(
        default=True,
        description="Whether to suggest splitting large changesets into several commits"
    )

    issue_tracking_enabled: bool = Field(
        default=True,
        description="Whether to reference the issue found in the branch name"
    )

    issue_tracker: str = Field(
        default="auto",
        description="Issue tracker used to read branch ids (auto, jira, github, linear, gitlab)"
    )

    remote_name: str = Field(
        default="origin",
        description="Name of the remote repository to push to"
    )

    auto_push: bool = Field(
        default=False,
        description="Whether to automatically push changes after committing"
    )

    no_verify: bool = Field(
        default=False,
        description="Whether to skip git hooks when committing"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Sanitize string values to prevent injection attacks."""
        if not value:
            return value

        # Remove control characters and null bytes
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        # Remove command injection patterns and split on them
        value = re.split(r'[;&|`$()]', value)[0]

        # Limit length
        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        # Check for path traversal patterns
        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        # Check for absolute paths
        if os.path.isabs(path):
            return False

        return True

    @classmethod
    def config_path(cls, repo_path: Path) -> Path:
        return Path(repo_path) / DEFAULT_CONFIG_FILENAME

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = cls.config_path(repo_path)

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            # Accept both a [commitgen] table and top-level keys
            config_section = config_data.get(CONFIG_SECTION, config_data)

            for key in STRING_FIELDS:
                if key in config_section and isinstance(config_section[key], str):
                    config_section[key] = cls._sanitize_string(config_section[key])

            if config_section.get('log_file') and not cls._is_safe_path(config_section['log_file']):
                console.print(f"[yellow]Warning: Unsafe log file path '{config_section['log_file']}', using default[/yellow]")
                config_section['log_file'] = None

            known = {k: v for k, v in config_section.items() if k in cls.model_fields}
            return cls(**known)
        except Exception as e:
            # If there's any error reading the config, use defaults
            console.print(f"[yellow]Warning: Error reading config file: {e}[/yellow]")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = self.config_path(repo_path)

        try:
            # TOML has no null, so None values are left out
            config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

            if config_dict.get('log_file') and not self._is_safe_path(config_dict['log_file']):
                console.print(f"[yellow]Warning: Unsafe log file path '{config_dict['log_file']}', not saving[/yellow]")
                config_dict.pop('log_file')

            with config_path.open('wb') as f:
                tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        except OSError as e:
            console.print(f"[red]Error saving config file: {e}[/red]")

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"commitgen-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            console.print(f"[yellow]Warning: Unsafe log file path '{self.log_file}', using default[/yellow]")
            return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        for field_name in STRING_FIELDS + BOOL_FIELDS + INT_FIELDS + FLOAT_FIELDS:
            env_var = ENV_PREFIX + field_name.upper()
            if env_var not in os.environ:
                continue
            value = os.environ[env_var]

            if field_name in STRING_FIELDS:
                value = self._sanitize_string(value)
            elif field_name in BOOL_FIELDS:
                value = value.lower() in ['true', '1', 'yes', 'on']

            env_data[field_name] = value

        # Explicit values win over the environment
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
