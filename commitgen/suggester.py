"""Deterministic commit message suggestions.

Used when no AI strategy is configured or the AI call fails. Each rule is an
independent predicate/builder pair; every rule that applies contributes one
candidate, in the order the rules are listed.
"""
from collections import Counter
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, List, Optional, Sequence

from .models import CommitMessage, CommitType, GitAnalysis

MAX_SUGGESTIONS = 5
LARGE_CHANGE_THRESHOLD = 20

GENERIC_ROOTS = {'src', 'lib', 'app', 'source', 'packages', 'pkg', 'tests', 'test', '__tests__', 'spec', 'specs'}
TEST_MARKERS = ('test', 'spec', '__tests__')
DOCS_MARKERS = ('README', '.md')
CONFIG_MARKERS = ('config', '.json', 'package.json')


def _path_token(path: str) -> Optional[str]:
    parts = [p for p in PurePosixPath(path.replace('\\', '/')).parts if p not in ('', '.', '/')]
    if not parts:
        return None
    directories = parts[:-1]
    while directories and directories[0].lower() in GENERIC_ROOTS:
        directories = directories[1:]
    if directories:
        return directories[0]
    filename = PurePosixPath(parts[-1])
    return (filename.suffix[1:] or filename.stem).lower() or None


def infer_scope(files: Sequence[str]) -> Optional[str]:
    """Pick the most common distinguishing directory or file type.

    Generic roots such as ``src/`` are skipped, so ``src/components/Button.tsx``
    gives ``components``. Ties go to the token seen first.
    """
    tokens = [token for token in (_path_token(f) for f in files) if token]
    if not tokens:
        return None
    counts = Counter(tokens)
    best = max(counts.values())
    for token in tokens:
        if counts[token] == best:
            return token
    return None


def _has_marker(analysis: GitAnalysis, markers) -> bool:
    return any(marker in path for path in analysis.files_changed for marker in markers)


@dataclass(frozen=True)
class SuggestionRule:
    """A named predicate plus the candidate it produces when it applies."""
    name: str
    applies: Callable[[GitAnalysis], bool]
    build: Callable[[GitAnalysis], CommitMessage]


def _mostly_additions(analysis: GitAnalysis) -> bool:
    return analysis.additions > analysis.deletions * 2 and analysis.additions > LARGE_CHANGE_THRESHOLD


def _mostly_deletions(analysis: GitAnalysis) -> bool:
    return analysis.deletions > analysis.additions * 2 and analysis.deletions > LARGE_CHANGE_THRESHOLD


def _build_feature(analysis: GitAnalysis) -> CommitMessage:
    scope = infer_scope(analysis.files_changed)
    subject = f"add {scope} functionality" if scope else "add new feature"
    return CommitMessage(type=CommitType.FEAT, scope=scope, subject=subject)


def _build_removal(analysis: GitAnalysis) -> CommitMessage:
    scope = infer_scope(analysis.files_changed)
    subject = f"remove unused {scope} code" if scope else "remove unused code"
    return CommitMessage(type=CommitType.REFACTOR, subject=subject)


def _build_tests(analysis: GitAnalysis) -> CommitMessage:
    scope = infer_scope(analysis.files_changed)
    subject = f"add tests for {scope}" if scope else "add tests"
    return CommitMessage(type=CommitType.TEST, subject=subject)


def _build_docs(analysis: GitAnalysis) -> CommitMessage:
    return CommitMessage(type=CommitType.DOCS, subject="update documentation")


def _build_config(analysis: GitAnalysis) -> CommitMessage:
    return CommitMessage(type=CommitType.CHORE, subject="update configuration")


def _build_generic(analysis: GitAnalysis) -> CommitMessage:
    scope = infer_scope(analysis.files_changed)
    subject = f"update {scope}" if scope else "update code"
    return CommitMessage(type=CommitType.FEAT, subject=subject)


RULES = (
    SuggestionRule("feature", _mostly_additions, _build_feature),
    SuggestionRule("removal", _mostly_deletions, _build_removal),
    SuggestionRule("tests", lambda a: _has_marker(a, TEST_MARKERS), _build_tests),
    SuggestionRule("docs", lambda a: _has_marker(a, DOCS_MARKERS), _build_docs),
    SuggestionRule("config", lambda a: _has_marker(a, CONFIG_MARKERS), _build_config),
)

FALLBACK_RULE = SuggestionRule("generic", lambda a: True, _build_generic)


def suggest(analysis: GitAnalysis, rules: Sequence[SuggestionRule] = RULES) -> List[CommitMessage]:
    """Return 1 to 5 candidates for ``analysis``, most confident first."""
    candidates = [rule.build(analysis) for rule in rules if rule.applies(analysis)]
    if not candidates:
        candidates.append(FALLBACK_RULE.build(analysis))
    return candidates[:MAX_SUGGESTIONS]
