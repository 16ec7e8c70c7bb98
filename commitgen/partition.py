"""Split a changeset into atomic commits grouped by concern.

Each file lands in exactly one concern bucket. Classification is a total
function over paths, so the partition property holds by construction.
"""
import re
from pathlib import PurePosixPath
from typing import Dict, List, Sequence, Tuple

from .models import (
    CommitMessage,
    CommitType,
    CommitUnit,
    Concern,
    ConcernGroup,
    PartitionResult,
)
from .suggester import infer_scope

MIN_FILES_TO_SPLIT = 4
MIN_CONCERNS_TO_SPLIT = 2

TYPES_PATTERNS = [
    r'(^|/)types?/', r'(^|/)typings/', r'(^|/)interfaces/', r'\.d\.ts$',
    r'(^|/)types?\.(ts|js|py|go|rs)$', r'\.types\.(ts|js)$', r'(^|/)typings?\.', r'\.pyi$',
]

TEST_PATTERNS = [
    r'(^|/)tests?/', r'(^|/)specs?/', r'(^|/)__tests__/', r'(^|/)__mocks__/',
    r'\.test\.', r'\.spec\.', r'_test\.', r'_spec\.', r'(^|/)test_[^/]*$',
    r'(^|/)conftest\.py$', r'Tests?\.(java|cs|kt)$',
]

DOCS_PATTERNS = [
    r'\.md$', r'\.mdx$', r'\.rst$', r'\.adoc$', r'(^|/)docs?/',
    r'(^|/)README', r'(^|/)CHANGELOG', r'(^|/)LICENSE', r'(^|/)CONTRIBUTING',
]

CONFIG_PATTERNS = [
    r'\.json$', r'\.ya?ml$', r'\.toml$', r'\.ini$', r'\.cfg$', r'(^|/)\.env',
    r'\.config\.', r'(^|/)config/', r'(^|/)settings/', r'(^|/)\.github/',
    r'(^|/)Makefile$', r'(^|/)Dockerfile', r'docker-compose', r'(^|/)\.gitignore$',
    r'(^|/)\.editorconfig$', r'(^|/)\.?eslintrc', r'(^|/)\.?prettierrc', r'\.lock$',
    r'(^|/)setup\.py$', r'(^|/)requirements[^/]*\.txt$',
]

API_PATTERNS = [
    r'(^|/)api/', r'(^|/)routes?/', r'(^|/)endpoints?/', r'(^|/)controllers?/',
    r'(^|/)handlers?/', r'(^|/)resolvers?/', r'\.graphql$', r'\.proto$', r'(^|/)openapi',
]

STYLE_PATTERNS = [
    r'\.css$', r'\.scss$', r'\.sass$', r'\.less$', r'\.styl$',
    r'\.(png|jpe?g|gif|svg|ico|webp|bmp)$', r'\.(woff2?|ttf|otf|eot)$',
    r'(^|/)styles?/', r'(^|/)assets/',
]

COMPONENT_PATTERNS = [r'(^|/)components?/', r'\.(tsx|jsx|vue|svelte)$']

UTIL_PATTERNS = [r'(^|/)utils?/', r'(^|/)helpers?/', r'(^|/)utilities/']

SOURCE_EXTENSIONS = {
    '.py', '.js', '.mjs', '.cjs', '.ts', '.go', '.rs', '.java', '.kt', '.rb',
    '.php', '.c', '.h', '.cpp', '.hpp', '.cc', '.cs', '.swift', '.scala', '.sh',
    '.html', '.sql', '.lua', '.ex', '.exs', '.dart',
}

# Patterns checked in priority order; the first match wins.
_CLASSIFIERS = [
    (Concern.TYPES, TYPES_PATTERNS),
    (Concern.TEST, TEST_PATTERNS),
    (Concern.DOCS, DOCS_PATTERNS),
    (Concern.CONFIG, CONFIG_PATTERNS),
    (Concern.API, API_PATTERNS),
    (Concern.STYLE, STYLE_PATTERNS),
    (Concern.COMPONENT, COMPONENT_PATTERNS),
    (Concern.UTIL, UTIL_PATTERNS),
]
_COMPILED = [
    (concern, [re.compile(p, re.IGNORECASE) for p in patterns])
    for concern, patterns in _CLASSIFIERS
]

CONCERN_ORDER: Dict[Concern, int] = {
    Concern.TYPES: 0,
    Concern.CONFIG: 1,
    Concern.FEATURE: 2,
    Concern.COMPONENT: 2,
    Concern.API: 2,
    Concern.UTIL: 2,
    Concern.TEST: 3,
    Concern.DOCS: 4,
    Concern.STYLE: 5,
    Concern.OTHER: 6,
}

CONCERN_COMMIT_TYPES: Dict[Concern, CommitType] = {
    Concern.TYPES: CommitType.REFACTOR,
    Concern.CONFIG: CommitType.CHORE,
    Concern.FEATURE: CommitType.FEAT,
    Concern.COMPONENT: CommitType.FEAT,
    Concern.API: CommitType.FEAT,
    Concern.UTIL: CommitType.REFACTOR,
    Concern.TEST: CommitType.TEST,
    Concern.DOCS: CommitType.DOCS,
    Concern.STYLE: CommitType.STYLE,
    Concern.OTHER: CommitType.CHORE,
}

# (subject with scope, subject without scope)
CONCERN_SUBJECTS: Dict[Concern, Tuple[str, str]] = {
    Concern.TYPES: ("update {scope} type definitions", "update type definitions"),
    Concern.CONFIG: ("update configuration", "update configuration"),
    Concern.FEATURE: ("update {scope}", "update source code"),
    Concern.COMPONENT: ("update {scope} components", "update components"),
    Concern.API: ("update {scope} endpoints", "update API endpoints"),
    Concern.UTIL: ("update {scope} helpers", "update helpers"),
    Concern.TEST: ("update tests for {scope}", "update tests"),
    Concern.DOCS: ("update documentation", "update documentation"),
    Concern.STYLE: ("update styles and assets", "update styles and assets"),
    Concern.OTHER: ("update project files", "update project files"),
}

# Concerns whose commits read better without a scope
UNSCOPED_CONCERNS = {Concern.CONFIG, Concern.DOCS, Concern.STYLE, Concern.OTHER}

_CONCERN_POSITION = {concern: index for index, concern in enumerate(Concern)}


def classify_file(path: str) -> Concern:
    """Assign a path to exactly one concern bucket."""
    normalized = path.replace('\\', '/')
    for concern, patterns in _COMPILED:
        if any(pattern.search(normalized) for pattern in patterns):
            return concern
    if PurePosixPath(normalized).suffix.lower() in SOURCE_EXTENSIONS:
        return Concern.FEATURE
    return Concern.OTHER


def partition(files: Sequence[str]) -> PartitionResult:
    """Group files by concern and decide whether a split is worthwhile.

    Groups are always computed, even when ``should_split`` is False, so the
    caller can show them.
    """
    distinct = list(dict.fromkeys(f for f in files if f))

    buckets: Dict[Concern, List[str]] = {}
    for path in distinct:
        buckets.setdefault(classify_file(path), []).append(path)

    groups = [
        ConcernGroup(concern=concern, files=paths, suggested_order=CONCERN_ORDER[concern])
        for concern, paths in buckets.items()
    ]
    groups.sort(key=lambda g: (g.suggested_order, _CONCERN_POSITION[g.concern]))

    should_split = len(distinct) >= MIN_FILES_TO_SPLIT and len(groups) >= MIN_CONCERNS_TO_SPLIT
    return PartitionResult(should_split=should_split, groups=groups)


def plan_commits(result: PartitionResult) -> List[CommitUnit]:
    """Turn a partition into ordered partial commits, one per group."""
    units = []
    for group in result.groups:
        scope = None
        if group.concern not in UNSCOPED_CONCERNS:
            scope = infer_scope(group.files)
        with_scope, without_scope = CONCERN_SUBJECTS[group.concern]
        subject = with_scope.format(scope=scope) if scope else without_scope
        units.append(CommitUnit(
            message=CommitMessage(
                type=CONCERN_COMMIT_TYPES[group.concern],
                scope=scope,
                subject=subject,
            ),
            files=list(group.files),
            concern=group.concern,
        ))
    return units
