"""Adapt candidate messages to the user's style and current issue."""
from typing import List, Optional, Sequence

from .models import Capitalization, CommitMessage, IssueReference, Punctuation, StyleProfile, TrackerKind


def _apply_capitalization(subject: str, capitalization: Capitalization) -> str:
    if not subject or capitalization == Capitalization.MIXED:
        return subject
    if capitalization == Capitalization.CAPITALIZED:
        return subject[0].upper() + subject[1:]
    return subject[0].lower() + subject[1:]


def _apply_punctuation(subject: str, punctuation: Punctuation) -> str:
    if not subject or punctuation == Punctuation.MIXED:
        return subject
    stripped = subject.rstrip('.')
    if punctuation == Punctuation.WITH_PERIOD:
        return stripped + '.'
    return stripped


def _add_issue_reference(body: Optional[str], issue_id: str) -> str:
    footer = f"Refs: {issue_id}"
    if not body:
        return footer
    if footer in body:
        return body
    return f"{body}\n\n{footer}"


def _has_issue(issue_ref: Optional[IssueReference]) -> bool:
    return issue_ref is not None and issue_ref.tracker_kind != TrackerKind.NONE and bool(issue_ref.id)


def restyle(
    message: CommitMessage,
    profile: Optional[StyleProfile] = None,
    issue_ref: Optional[IssueReference] = None,
) -> CommitMessage:
    """Apply the profile's subject style and the issue footer to one message."""
    updates = {}
    if profile is not None and not profile.is_empty:
        subject = _apply_capitalization(message.subject, profile.capitalization)
        updates['subject'] = _apply_punctuation(subject, profile.punctuation)
    if _has_issue(issue_ref):
        updates['body'] = _add_issue_reference(message.body, issue_ref.id)
    return message.model_copy(update=updates)


def personalize(
    candidates: Sequence[CommitMessage],
    profile: Optional[StyleProfile] = None,
    issue_ref: Optional[IssueReference] = None,
) -> List[CommitMessage]:
    """Re-rank and restyle candidates.

    The output has exactly as many candidates as the input. Candidates of
    historically frequent types move first; ties keep their original order.
    A branch type hint replaces the type of the top candidate only.
    """
    profile = profile or StyleProfile()
    ranked = sorted(
        candidates,
        key=lambda c: -profile.preferred_types.get(c.type, 0.0),
    )

    personalized = [restyle(candidate, profile, issue_ref) for candidate in ranked]

    if (
        personalized
        and _has_issue(issue_ref)
        and issue_ref.type_hint is not None
        and personalized[0].type != issue_ref.type_hint
    ):
        personalized[0] = personalized[0].model_copy(update={'type': issue_ref.type_hint})

    return personalized
