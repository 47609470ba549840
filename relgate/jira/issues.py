"""Issue-key extraction from categorized commits.

Compiling the pattern and scanning commits are separate steps: a pattern
that does not compile is reported once as an IssuePatternError, which callers
must keep distinct from a scan that simply found nothing.
"""

from __future__ import annotations

import re
from functools import lru_cache

from relgate.core.result import Err, Ok, Result
from relgate.jira.config import DEFAULT_ISSUE_PATTERN, JiraConfig
from relgate.jira.errors import IssuePatternError
from relgate.jira.model import CategorizedChanges

__all__ = ["compile_issue_pattern", "extract_issue_keys", "scan_issue_keys"]


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def compile_issue_pattern(pattern: str) -> Result[re.Pattern[str], IssuePatternError]:
    """Compile `pattern`, or the default pattern when it is empty."""
    source = pattern or DEFAULT_ISSUE_PATTERN
    try:
        return Ok(_compile(source))
    except re.error as e:
        return Err(IssuePatternError(pattern=source, message=str(e)))


def scan_issue_keys(pattern: re.Pattern[str], changes: CategorizedChanges) -> tuple[str, ...]:
    seen: dict[str, None] = {}

    def add(key: str) -> None:
        seen.setdefault(key.upper(), None)

    for commit in changes.iter_commits():
        for text in (commit.description, commit.body):
            if not text:
                continue
            for match in pattern.finditer(text):
                add(match.group(0))
        for ref in commit.issues:
            if pattern.search(ref):
                add(ref)

    return tuple(seen)


def extract_issue_keys(
    cfg: JiraConfig, changes: CategorizedChanges | None
) -> Result[tuple[str, ...], IssuePatternError]:
    """Collect upper-cased, de-duplicated issue keys in first-seen order."""
    compiled = compile_issue_pattern(cfg.issue_pattern)
    if isinstance(compiled, Err):
        return compiled
    if changes is None:
        return Ok(())
    return Ok(scan_issue_keys(compiled.value, changes))
