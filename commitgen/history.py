"""Learn a user's commit style from recent history.

The profile is cached for a few minutes: history rarely changes while the
tool runs, and a slightly stale profile is fine.
"""
import re
import time
from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence

from .models import Capitalization, CommitLogEntry, CommitType, Punctuation, StyleProfile

DEFAULT_SAMPLE_SIZE = 50
DEFAULT_CACHE_TTL = 300.0
MAX_COMMON_PHRASES = 10
PHRASE_LENGTHS = (2, 3)

_CONVENTIONAL_PREFIX = re.compile(r'^(?P<type>[A-Za-z]+)(?:\([^)]*\))?!?:\s*')
_WORD = re.compile(r"[a-z0-9][a-z0-9'_-]*")


def split_subject(subject: str):
    """Split ``type(scope): text`` into ``(type, text)``.

    The type is None when the subject has no recognised conventional prefix;
    the text is then the whole subject.
    """
    subject = (subject or "").strip()
    match = _CONVENTIONAL_PREFIX.match(subject)
    if match:
        commit_type = CommitType.parse(match.group('type'))
        if commit_type is not None:
            return commit_type, subject[match.end():].strip()
    return None, subject


def _majority(votes: Counter, options, fallback):
    total = sum(votes.values())
    for option in options:
        if total and votes[option] * 2 > total:
            return option
    return fallback


def _capitalization_of(text: str) -> Optional[Capitalization]:
    for char in text:
        if char.isalpha():
            return Capitalization.CAPITALIZED if char.isupper() else Capitalization.LOWER
    return None


def _phrases(text: str) -> List[str]:
    words = _WORD.findall(text.lower())
    found = []
    for size in PHRASE_LENGTHS:
        for start in range(len(words) - size + 1):
            phrase = " ".join(words[start:start + size])
            if phrase not in found:
                found.append(phrase)
    return found


def _common_phrases(subjects: Sequence[str]) -> List[str]:
    counts: Counter = Counter()
    first_seen: Dict[str, int] = {}
    for index, text in enumerate(subjects):
        for phrase in _phrases(text):
            counts[phrase] += 1
            first_seen.setdefault(phrase, index)

    recurring = [phrase for phrase, count in counts.items() if count >= 2]
    # most frequent, then most recent, then longest
    recurring.sort(key=lambda p: (-counts[p], first_seen[p], -len(p.split())))
    return recurring[:MAX_COMMON_PHRASES]


def build_profile(entries: Sequence[CommitLogEntry], sample_size: int = DEFAULT_SAMPLE_SIZE) -> StyleProfile:
    """Build a :class:`StyleProfile` from commit log entries, newest first.

    An empty history gives the neutral profile.
    """
    sample = list(entries or [])[:sample_size]
    if not sample:
        return StyleProfile()

    type_counts: Counter = Counter()
    capitalization_votes: Counter = Counter()
    punctuation_votes: Counter = Counter()
    subjects = []

    for entry in sample:
        parsed_type, text = split_subject(entry.subject)
        commit_type = entry.type or parsed_type
        if commit_type is not None:
            type_counts[commit_type] += 1

        subjects.append(text)
        capitalization = _capitalization_of(text)
        if capitalization is not None:
            capitalization_votes[capitalization] += 1
        if text:
            punctuation_votes[Punctuation.WITH_PERIOD if text.endswith('.') else Punctuation.WITHOUT_PERIOD] += 1

    typed_total = sum(type_counts.values())
    preferred_types = {
        commit_type: count / typed_total for commit_type, count in type_counts.items()
    } if typed_total else {}

    return StyleProfile(
        preferred_types=preferred_types,
        avg_subject_length=sum(len(s) for s in subjects) / len(subjects),
        capitalization=_majority(
            capitalization_votes,
            (Capitalization.LOWER, Capitalization.CAPITALIZED),
            Capitalization.MIXED,
        ),
        punctuation=_majority(
            punctuation_votes,
            (Punctuation.WITH_PERIOD, Punctuation.WITHOUT_PERIOD),
            Punctuation.MIXED,
        ),
        common_phrases=_common_phrases(subjects),
        sample_size=len(sample),
    )


class ProfileCache:
    """Single-slot cache for a :class:`StyleProfile` with a time-to-live.

    Attributes:
        ttl (float): Seconds a computed profile stays fresh
        clock (Callable[[], float]): Time source, injectable for tests
        profile (Optional[StyleProfile]): The cached profile
        timestamp (Optional[float]): Clock reading when it was computed
    """

    def __init__(self, ttl: float = DEFAULT_CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self.profile: Optional[StyleProfile] = None
        self.timestamp: Optional[float] = None

    def is_fresh(self) -> bool:
        if self.profile is None or self.timestamp is None:
            return False
        return self.clock() - self.timestamp < self.ttl

    def get_or_compute(self, compute: Callable[[], StyleProfile]) -> StyleProfile:
        """Return the cached profile, recomputing it once the TTL has passed."""
        if self.is_fresh():
            return self.profile
        self.profile = compute()
        self.timestamp = self.clock()
        return self.profile

    def clear(self) -> None:
        self.profile = None
        self.timestamp = None


class HistoryProfiler:
    """Builds style profiles from a commit log source.

    ``load_entries`` is called with the sample size and returns entries newest
    first. Failures to read history never propagate: the caller gets the
    neutral profile and treats it as "no personalization".
    """

    def __init__(
        self,
        load_entries: Callable[[int], List[CommitLogEntry]],
        cache: Optional[ProfileCache] = None,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
    ):
        self.load_entries = load_entries
        self.cache = cache or ProfileCache()
        self.sample_size = sample_size

    def get_profile(self, entries: Optional[Sequence[CommitLogEntry]] = None) -> StyleProfile:
        if entries is None:
            try:
                entries = self.load_entries(self.sample_size)
            except Exception:
                return StyleProfile()
        return build_profile(entries, self.sample_size)

    def get_cached_profile(self) -> StyleProfile:
        return self.cache.get_or_compute(self.get_profile)
