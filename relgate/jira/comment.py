"""Jira comment rendering from a release context."""

from __future__ import annotations

import re

from relgate.jira.model import ReleaseContext

_PLACEHOLDER_RE = re.compile(r"\{(version|tag|release_url|repository)\}")


def build_comment(template: str, context: ReleaseContext) -> str:
    """Render a comment template for the given release.

    Known placeholders are {version}, {tag}, {release_url} and {repository};
    anything else in braces is left as written. Substitution is single pass,
    so a value that itself contains a placeholder is not expanded again.
    """
    if not template:
        return ""

    values = {
        "version": context.version,
        "tag": context.tag_name,
        "release_url": context.repository_url,
        "repository": context.repository_name,
    }
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template)
