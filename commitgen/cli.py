#!/usr/bin/env python3
import asyncio
import os
from pathlib import Path
from typing import List, Optional, Union

import click
import pyperclip
from rich.console import Console
from rich.markup import escape

from .commit_message import CommitMessageValidator
from .config import ENV_PREFIX, Config
from .core import (
    CommitGenError,
    GitCommitter,
    NoStagedChangesError,
    RepositoryReader,
    SuggestionPipeline,
    SuggestionResult,
)
from .factories import PROVIDERS, RuleBasedStrategyFactory, get_strategy_factory
from .history import HistoryProfiler, ProfileCache
from .models import CommitMessage, CommitUnit, GitAnalysis
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()

MAX_DISPLAYED_FILES = 10


def run_async(coro):
    """Run an async coroutine, handling both test and production environments."""
    try:
        loop = asyncio.get_running_loop()
        # A running loop means we were called from async code (tests, notebooks)
        if loop.is_running():
            try:
                return asyncio.run(coro)
            except RuntimeError:
                import nest_asyncio

                nest_asyncio.apply()
                return asyncio.run(coro)
        else:
            return loop.run_until_complete(coro)
    except RuntimeError:
        # No event loop running, use asyncio.run()
        return asyncio.run(coro)


def build_pipeline(config: Config, reader: RepositoryReader, api_key: Optional[str] = None) -> SuggestionPipeline:
    """Wire the suggestion pipeline from configuration.

    An unknown provider falls back to rule-based suggestions, like any other
    unavailable provider.
    """
    factory = RuleBasedStrategyFactory()
    if config.use_ai:
        try:
            factory = get_strategy_factory(
                config.provider, config.model, api_key, base_url=config.ollama_url
            )
        except ValueError as e:
            console.print(f"[yellow]Warning: {escape(str(e))}[/yellow]")
            console.print("[dim]Falling back to rule-based suggestions...[/dim]")
            config.use_ai = False

    profiler = HistoryProfiler(
        reader.recent_commits,
        cache=ProfileCache(ttl=config.history_cache_ttl),
        sample_size=config.history_sample_size,
    )

    return SuggestionPipeline(
        strategy=factory.create_commit_strategy(),
        profiler=profiler,
        history_enabled=config.history_enabled,
        multi_commit_enabled=config.multi_commit_enabled,
        issue_tracking_enabled=config.issue_tracking_enabled,
        issue_tracker=config.issue_tracker,
    )


def print_config(config: Config, repo_path: Path) -> None:
    config_path = Config.config_path(repo_path)

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<24} {'Value':<28} {'Source':<10}")
    console.print("-" * 62)

    for name in Config.model_fields:
        value = getattr(config, name)
        if ENV_PREFIX + name.upper() in os.environ:
            source = "env"
        elif config_path.exists():
            source = "config"
        else:
            source = "default"
        console.print(f"{name:<24} {escape(str(value if value is not None else 'None')):<28} {source:<10}")

    console.print(
        f"\nTo modify these settings, create or edit {config_path.name} in your repository root"
    )


def display_analysis(analysis: GitAnalysis) -> None:
    console.print("\n[bold cyan]Change analysis[/bold cyan]")
    console.print(f"  Files changed: {len(analysis.files_changed)}")
    console.print(f"  [green]+{analysis.additions}[/green] [red]-{analysis.deletions}[/red]")

    for file in analysis.files_changed[:MAX_DISPLAYED_FILES]:
        console.print(f"  [dim]- {escape(file)}[/dim]")
    hidden = len(analysis.files_changed) - MAX_DISPLAYED_FILES
    if hidden > 0:
        console.print(f"  [dim]... and {hidden} more[/dim]")


def display_suggestions(result: SuggestionResult) -> None:
    if result.used_fallback and result.error:
        console.print(f"[yellow]AI generation failed: {escape(result.error)}[/yellow]")
        console.print("[dim]Falling back to rule-based suggestions...[/dim]")

    if result.issue is not None and result.issue.id:
        console.print(f"[dim]Issue: {escape(result.issue.id)} ({result.issue.tracker_kind.value})[/dim]")

    console.print("\n[bold cyan]Suggested commit messages:[/bold cyan]")
    for i, candidate in enumerate(result.candidates, 1):
        console.print(f"  {i}. [green]{escape(candidate.header)}[/green]")


def display_plan(plan: List[CommitUnit]) -> None:
    console.print(
        f"\n[bold cyan]These changes touch several concerns; suggested split into {len(plan)} commits:[/bold cyan]"
    )
    for i, unit in enumerate(plan, 1):
        console.print(f"  {i}. [green]{escape(unit.description)}[/green]")
        console.print(f"     [dim]{escape(', '.join(unit.files))}[/dim]")


def prompt_custom_message(validator: CommitMessageValidator) -> str:
    message = click.prompt("Enter your commit message").strip()
    is_valid, error = validator.validate(message)
    if not is_valid:
        console.print(f"[yellow]Warning: {escape(error)}[/yellow]")
    return message


def choose_message(
    candidates: List[CommitMessage],
    validator: CommitMessageValidator,
    assume_yes: bool = False,
) -> Union[CommitMessage, str]:
    """Ask the user to pick a candidate, or to type their own message.

    Returns the chosen candidate, or the custom message text.
    """
    if assume_yes:
        return candidates[0]

    choice = click.prompt(
        "Choose a commit message (0 to write your own)",
        type=click.IntRange(0, len(candidates)),
        default=1,
    )
    if choice == 0:
        return prompt_custom_message(validator)

    selected = candidates[choice - 1]
    console.print(f"\n{escape(selected.render())}\n")
    if click.confirm("Confirm this commit message?", default=True):
        return selected
    return prompt_custom_message(validator)


def create_committer(repo_path: Path, config: Config, log_file: Optional[Path]) -> GitCommitter:
    committer = GitCommitter(
        str(repo_path),
        no_verify=config.no_verify,
        remote_name=config.remote_name,
        console=console,
    )
    committer.add_observer(ConsoleLogObserver(console))

    log_file_path = log_file or config.get_log_file()
    if log_file_path:
        committer.add_observer(FileLogObserver(str(log_file_path)))
    return committer


@click.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--push", is_flag=True, help="Push to the remote after committing")
@click.option("-n", "--no-verify", is_flag=True, help="Skip git hooks when creating commits")
@click.option("--no-ai", is_flag=True, help="Use rule-based suggestions only")
@click.option(
    "--provider",
    type=click.Choice(PROVIDERS, case_sensitive=False),
    help="AI provider to use (overrides config setting)",
)
@click.option(
    "--model",
    help="AI model to use (e.g. gemini-2.5-flash, claude-3-5-sonnet-latest, ollama:qwen2.5-coder:7b)",
)
@click.option(
    "--api-key",
    envvar=[
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "GOOGLE_GENERATIVE_AI_API_KEY",
        "ANTHROPIC_API_KEY",
    ],
    help="API key for the selected provider. Can also be set via GEMINI_API_KEY, GOOGLE_API_KEY, "
         "GOOGLE_GENERATIVE_AI_API_KEY or ANTHROPIC_API_KEY. Not needed for local models.",
)
@click.option("-d", "--dry-run", is_flag=True, help="Show suggestions without committing")
@click.option("-y", "--yes", is_flag=True, help="Accept the top suggestion without prompting")
@click.option(
    "--split/--no-split",
    default=None,
    help="Offer to split mixed changesets into several commits (overrides config setting)",
)
@click.option("--no-history", is_flag=True, help="Don't personalize suggestions from commit history")
@click.option("--no-issue", is_flag=True, help="Don't reference the issue found in the branch name")
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log git operations (overrides config setting)",
)
@click.option("--config-list", is_flag=True, help="Display current configuration settings")
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    path: Path,
    push: bool,
    no_verify: bool,
    no_ai: bool,
    provider: Optional[str],
    model: Optional[str],
    api_key: Optional[str],
    dry_run: bool,
    yes: bool,
    split: Optional[bool],
    no_history: bool,
    no_issue: bool,
    log_file: Optional[Path],
    config_list: bool,
    config_dir: bool,
    version: bool,
):
    """
    Suggest Conventional Commits messages for your staged changes.

    This tool will:
    1. Analyze the staged changes
    2. Draft commit messages with an AI provider, or with built-in rules
    3. Adapt them to your commit history and the issue in your branch name
    4. Offer to split mixed changesets into several commits
    5. Commit, and optionally push

    Configuration can be set in .commitgen.toml in the repository root.
    Command line options override configuration file settings.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info()
            return

        repo_path = path.absolute()

        if config_list:
            print_config(Config.load(repo_path), repo_path)
            return

        if config_dir:
            config_path = Config.config_path(repo_path)
            config_path_str = str(config_path)

            if not config_path.exists():
                Config().save(repo_path)
                console.print("[yellow]Created new config file with default values[/yellow]")

            pyperclip.copy(config_path_str)
            console.print(f"[green]Config file location:[/green] {config_path_str}")
            console.print("[green]Path copied to clipboard![/green]")
            return

        config = Config.load(repo_path)

        # Command line options override config
        if provider is not None:
            config.provider = provider.lower()
        if model is not None:
            config.model = model
        if no_ai:
            config.use_ai = False
        if no_history:
            config.history_enabled = False
        if no_issue:
            config.issue_tracking_enabled = False
        if split is not None:
            config.multi_commit_enabled = split
        if push:
            config.auto_push = True
        if no_verify:
            config.no_verify = True

        reader = RepositoryReader(str(repo_path))
        pipeline = build_pipeline(config, reader, api_key)

        if config.use_ai:
            console.print(f"\n[blue]Generating commit messages using {escape(config.provider)}...[/blue]")
        result = run_async(pipeline.run(reader.snapshot()))

        display_analysis(result.analysis)
        display_suggestions(result)

        plan = result.commit_plan if config.multi_commit_enabled else []
        if plan:
            display_plan(plan)

        if dry_run:
            console.print("\n[yellow]Dry run: no commits created[/yellow]")
            return

        committer = create_committer(repo_path, config, log_file)

        if plan and (yes or click.confirm(f"\nCreate {len(plan)} separate commits?", default=True)):
            success = run_async(committer.commit_changes(plan))
        else:
            message = choose_message(result.candidates, CommitMessageValidator(), assume_yes=yes)
            success = run_async(committer.commit(message))

        if not success:
            console.print("[red]Commit failed[/red]")
            raise click.Abort()

        console.print("[green]Commit successful![/green]")

        if config.auto_push:
            console.print("\n[blue]Pushing to remote...[/blue]")
            if not run_async(committer.push_changes()):
                raise click.Abort()
    except NoStagedChangesError as e:
        console.print("[yellow]No staged changes found.[/yellow]")
        if e.has_unstaged:
            console.print("[dim]You have unstaged changes. Stage them with: git add <files>[/dim]")
    except CommitGenError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except click.exceptions.ClickException:
        raise
    except click.Abort:
        raise
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
