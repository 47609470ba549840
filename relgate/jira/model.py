"""Release data handed to the plugin by the release host.

The host sends decoded JSON; each record has a `from_dict` that reads it
without raising on missing or mistyped fields.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Literal

from relgate.core.structured import as_str_dict, get_exact_str, get_list, get_str_list, get_table

ChangeCategory = Literal[
    "features",
    "fixes",
    "breaking",
    "performance",
    "refactor",
    "docs",
    "other",
]

# Scan order for issue extraction.
CATEGORY_ORDER: tuple[ChangeCategory, ...] = (
    "features",
    "fixes",
    "breaking",
    "performance",
    "refactor",
    "docs",
    "other",
)


@dataclass(frozen=True, slots=True)
class ConventionalCommit:
    description: str
    body: str = ""
    # Issue references already parsed out of trailers by the host.
    issues: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ConventionalCommit:
        return cls(
            description=get_exact_str(data, "description"),
            body=get_exact_str(data, "body"),
            issues=get_str_list(data, "issues"),
        )


@dataclass(frozen=True, slots=True)
class CategorizedChanges:
    features: tuple[ConventionalCommit, ...] = ()
    fixes: tuple[ConventionalCommit, ...] = ()
    breaking: tuple[ConventionalCommit, ...] = ()
    performance: tuple[ConventionalCommit, ...] = ()
    refactor: tuple[ConventionalCommit, ...] = ()
    docs: tuple[ConventionalCommit, ...] = ()
    other: tuple[ConventionalCommit, ...] = ()

    def category(self, name: ChangeCategory) -> tuple[ConventionalCommit, ...]:
        commits: tuple[ConventionalCommit, ...] = getattr(self, name)
        return commits

    def iter_commits(self) -> Iterator[ConventionalCommit]:
        """Yield every commit, category by category in CATEGORY_ORDER."""
        for name in CATEGORY_ORDER:
            yield from self.category(name)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> CategorizedChanges:
        parsed: dict[str, tuple[ConventionalCommit, ...]] = {}
        for name in CATEGORY_ORDER:
            commits: list[ConventionalCommit] = []
            for item in get_list(data, name) or []:
                table = as_str_dict(item)
                if table is not None:
                    commits.append(ConventionalCommit.from_dict(table))
            parsed[name] = tuple(commits)
        return cls(**parsed)


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """What the host tells us about the release being processed."""

    version: str = ""
    tag_name: str = ""
    repository_name: str = ""
    repository_url: str = ""
    changes: CategorizedChanges | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseContext:
        changes = get_table(data, "changes")
        return cls(
            version=get_exact_str(data, "version"),
            tag_name=get_exact_str(data, "tag_name"),
            repository_name=get_exact_str(data, "repository_name"),
            repository_url=get_exact_str(data, "repository_url"),
            changes=CategorizedChanges.from_dict(changes) if changes is not None else None,
        )
