"""Tests for commit message reconstruction."""

import pytest

from branch_diff.core.message_formatter import (
    DelimitedListFormatter,
    MessageFormatter,
    PlainFormatter,
)


@pytest.fixture
def formatter():
    return DelimitedListFormatter()


def test_delimited_subject_without_body_becomes_bullets(formatter):
    message = formatter.format("Fix bug - Update docs - Add tests")
    assert message == "Fix bug\n- Update docs\n- Add tests"


def test_single_line_body_that_is_not_a_list_is_kept(formatter):
    assert formatter.format("chore: release", "v1.2.3") == "chore: release\nv1.2.3"


def test_plain_subject_without_body(formatter):
    assert formatter.format("Initial commit", "") == "Initial commit"


def test_single_line_body_list_is_bulleted_under_subject(formatter):
    body = "Sync changes - Fixed the login redirect. - Removed unused imports."
    assert formatter.format("Weekly merge", body) == (
        "Weekly merge\nSync changes\n- Fixed the login redirect.\n- Removed unused imports."
    )


def test_multi_line_body_is_never_reformatted(formatter):
    body = "First - Second item here\nThird - Fourth item here\n"
    assert formatter.format("Subject", body) == f"Subject\n{body.rstrip()}"


def test_subject_is_not_reformatted_when_a_body_exists(formatter):
    message = formatter.format("Fix bug - Update docs - Add tests", "Details")
    assert message == "Fix bug - Update docs - Add tests\nDetails"


def test_long_title_prevents_list_detection(formatter):
    title = "x" * 101
    subject = f"{title} - Update the docs - Add the tests"
    assert formatter.format(subject) == subject


def test_title_at_limit_is_accepted(formatter):
    title = "y" * 100
    assert formatter.format(f"{title} - Update docs") == f"{title}\n- Update docs"


def test_trivial_segment_prevents_list_detection(formatter):
    assert formatter.format("Bump - v2") == "Bump - v2"


def test_single_word_segment_needs_punctuation_or_length(formatter):
    assert formatter.format("Release - changelog") == "Release - changelog"
    assert formatter.format("Release - changelog.") == "Release\n- changelog."
    long_word = "supercalifragilisticexpialidocious"
    assert formatter.format(f"Release - {long_word}") == f"Release\n- {long_word}"


def test_cjk_punctuation_counts_as_sentence(formatter):
    assert formatter.format("修复 - 更新文档。") == "修复\n- 更新文档。"


def test_hyphenated_words_are_not_delimiters(formatter):
    subject = "Use built-in type-checks"
    assert formatter.format(subject) == subject


def test_plain_formatter_never_bullets():
    formatter = PlainFormatter()
    assert formatter.format("Fix bug - Update docs - Add tests") == (
        "Fix bug - Update docs - Add tests"
    )
    assert formatter.format("chore: release", "v1.2.3\n") == "chore: release\nv1.2.3"


def test_custom_strategy_can_be_substituted():
    class Upper(MessageFormatter):
        def format(self, subject, body=""):
            return subject.upper()

    assert Upper().format("hello") == "HELLO"
