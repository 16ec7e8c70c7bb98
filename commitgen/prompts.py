"""System prompts for commitgen."""
from .models import GitAnalysis

MAX_DIFF_CHARS = 8000
MAX_PROMPT_FILES = 50

COMMIT_MESSAGE_PROMPT = '''You are a Git commit message generator that writes Conventional Commits.

Given a summary of staged changes and their diff, propose up to 5 alternative
commit messages, best first. Each alternative must be a distinct reading of the
change, not a rewording of the same message.

Message Format Rules:
1. type: one of feat, fix, docs, style, refactor, perf, test, build, ci, chore, revert
2. scope: optional, one short word naming the area of the codebase (e.g. "auth", "api", "components")
3. subject:
   - Imperative mood ("add" not "added")
   - Start with lowercase
   - No period at end
   - Max 50 characters
   - Specific, never generic ("update code", "fix stuff")
4. body: optional, explains WHY the change was made, wrapped at 72 characters
5. breaking: true only when the change breaks backwards compatibility

Types:
- feat: New feature or significant enhancement
- fix: Bug fix
- docs: Documentation only
- style: Formatting, no code change
- refactor: Code reorganization without behavior change
- perf: Performance improvement
- test: Adding/modifying tests
- build: Build system or dependencies
- ci: Continuous integration configuration
- chore: Maintenance tasks
- revert: Reverts a previous commit

Good Message Examples:
---
feat(auth): add JWT refresh token rotation
---
fix(api): handle null responses from inventory service
---
docs: document release process
---
'''

JSON_OUTPUT_INSTRUCTIONS = '''Respond with ONLY a JSON array, no prose and no code fences. Each element is an object
with the keys "type", "scope", "subject", "body" and "breaking". Use null for a missing
scope or body. Example:
[{"type": "feat", "scope": "auth", "subject": "add login form", "body": null, "breaking": false}]
'''


def truncate_diff(diff: str, limit: int = MAX_DIFF_CHARS) -> str:
    """Shorten a diff so it fits in a prompt."""
    if len(diff) <= limit:
        return diff
    return diff[:limit] + f"\n... [diff truncated, {len(diff) - limit} more characters]"


def build_analysis_prompt(analysis: GitAnalysis) -> str:
    """Describe a staged changeset for the model."""
    files = analysis.files_changed[:MAX_PROMPT_FILES]
    file_lines = "\n".join(f"- {path}" for path in files) or "- (none reported)"
    if len(analysis.files_changed) > MAX_PROMPT_FILES:
        file_lines += f"\n- ... and {len(analysis.files_changed) - MAX_PROMPT_FILES} more files"

    return f"""Please analyze these staged changes and suggest commit messages.

Files changed ({len(analysis.files_changed)}):
{file_lines}

Lines added: {analysis.additions}
Lines removed: {analysis.deletions}

Diff:
{truncate_diff(analysis.diff)}
"""
