from __future__ import annotations

from relgate.jira.model import CATEGORY_ORDER, CategorizedChanges, ConventionalCommit, ReleaseContext


def test_context_from_dict() -> None:
    context = ReleaseContext.from_dict(
        {
            "version": "1.0.0",
            "tag_name": "v1.0.0",
            "repository_name": "acme/widgets",
            "repository_url": "https://github.com/acme/widgets",
            "changes": {
                "features": [{"description": "feat: PROJ-1 add", "issues": ["PROJ-2"]}],
                "fixes": [{"description": "fix: crash", "body": "Closes PROJ-3"}],
            },
        }
    )
    assert context.version == "1.0.0"
    assert context.tag_name == "v1.0.0"
    assert context.repository_name == "acme/widgets"
    assert context.repository_url == "https://github.com/acme/widgets"
    assert context.changes is not None
    assert context.changes.features == (ConventionalCommit("feat: PROJ-1 add", issues=("PROJ-2",)),)
    assert context.changes.fixes == (ConventionalCommit("fix: crash", body="Closes PROJ-3"),)
    assert context.changes.docs == ()


def test_context_without_changes() -> None:
    context = ReleaseContext.from_dict({"version": "2.0.0"})
    assert context.changes is None
    assert context.tag_name == ""


def test_malformed_entries_are_skipped() -> None:
    changes = CategorizedChanges.from_dict(
        {
            "features": ["not a table", {"description": "feat: ok"}, 42],
            "fixes": "not a list",
            "other": [{"description": 5, "issues": "PROJ-1"}],
        }
    )
    assert changes.features == (ConventionalCommit("feat: ok"),)
    assert changes.fixes == ()
    assert changes.other == (ConventionalCommit(""),)


def test_iter_commits_follows_category_order() -> None:
    changes = CategorizedChanges(
        other=(ConventionalCommit("o"),),
        features=(ConventionalCommit("f1"), ConventionalCommit("f2")),
        performance=(ConventionalCommit("p"),),
    )
    assert [c.description for c in changes.iter_commits()] == ["f1", "f2", "p", "o"]
    assert CATEGORY_ORDER[0] == "features"
    assert changes.category("performance") == (ConventionalCommit("p"),)
