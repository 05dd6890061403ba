"""Tests for conventional-commit classification."""

from __future__ import annotations

from gitrelease.categories import (
    categorize,
    category_display,
    included_categories,
    split_category,
)
from gitrelease.git import CommitRecord


def make_commit(commit_id: str, message: str) -> CommitRecord:
    return CommitRecord(id=commit_id, author_time=0, message=message.encode("utf-8"))


def sample_commits() -> list[CommitRecord]:
    return [
        make_commit("1", "feat(x): add thing"),
        make_commit("2", "Release 1.0.0"),
        make_commit("3", "fix: correct bug"),
        make_commit("4", "chore: tidy"),
    ]


def test_categorize_groups_descriptions_by_type() -> None:
    table = categorize(sample_commits())

    assert table == {
        "feat": ["add thing"],
        "fix": ["correct bug"],
        "chore": ["tidy"],
    }


def test_categorize_keeps_traversal_order_within_a_category() -> None:
    commits = [
        make_commit("1", "fix: newest"),
        make_commit("2", "fix: middle"),
        make_commit("3", "fix: oldest"),
    ]
    assert categorize(commits) == {"fix": ["newest", "middle", "oldest"]}


def test_categorize_drops_titles_without_colon() -> None:
    commits = [make_commit("1", "Update readme"), make_commit("2", "docs: explain")]
    assert categorize(commits) == {"docs": ["explain"]}


def test_categorize_uses_only_the_first_message_line() -> None:
    commits = [make_commit("1", "Polish output\n\nfeat: not a title")]
    assert categorize(commits) == {}


def test_categorize_applies_submodule_filter() -> None:
    commits = [
        make_commit("1", "feat(core): core feature"),
        make_commit("2", "feat(cli): cli feature"),
        make_commit("3", "fix(core): core fix"),
    ]
    assert categorize(commits, "core") == {"feat": ["core feature"], "fix": ["core fix"]}


def test_split_category_stops_at_parenthesis_before_colon() -> None:
    assert split_category("feat(x): add thing") == ("feat", "add thing")
    assert split_category("fix:   spaced out  ") == ("fix", "spaced out")


def test_split_category_ignores_parenthesis_after_colon() -> None:
    assert split_category("fix: handle foo(bar)") == ("fix", "handle foo(bar)")


def test_split_category_splits_on_first_colon() -> None:
    assert split_category("docs: note: more") == ("docs", "note: more")


def test_split_category_without_colon() -> None:
    assert split_category("Merge branch 'topic'") is None


def test_category_display_lookup() -> None:
    assert category_display("feat") == ("Features", True)
    assert category_display("perf") == ("Performance Improvements", True)
    assert category_display("chore")[1] is False
    assert category_display("build")[1] is False


def test_included_categories_uses_fixed_order_and_hides_excluded() -> None:
    table = {
        "perf": ["faster"],
        "chore": ["tidy"],
        "docs": ["explain"],
        "fix": ["bug"],
        "feat": ["thing"],
        "ci": ["pipeline"],
    }
    assert included_categories(table) == [
        ("Features", ["thing"]),
        ("Bug Fixes", ["bug"]),
        ("Documentation", ["explain"]),
        ("Performance Improvements", ["faster"]),
    ]
