"""Tests for the shared models."""
import pytest

from gitcopilot.models import ChangeKind, ChangeSet, CommitMessage, CommitType


def test_commit_types_have_emoji():
    assert len(CommitType) == 10
    assert CommitType.FEAT.emoji == "✨"
    assert CommitType.FIX.emoji == "🐛"
    assert CommitType.CHORE.emoji == "🔨"
    for commit_type in CommitType:
        assert commit_type.emoji
        assert commit_type.description


def test_change_set_add_and_counts():
    changes = ChangeSet()
    assert changes.is_empty

    changes.add("a.txt", ChangeKind.ADDED)
    changes.add("b.txt", ChangeKind.MODIFIED)
    changes.add("c.txt", ChangeKind.DELETED)

    assert changes.added == ["a.txt"]
    assert changes.modified == ["b.txt"]
    assert changes.deleted == ["c.txt"]
    assert changes.total == 3
    assert not changes.is_empty


def test_parse_conventional_message():
    message = CommitMessage.parse(
        "✨ feat: add login form\n\n- add form component\n- wire up validation\n"
    )
    assert message.emoji == "✨"
    assert message.type is CommitType.FEAT
    assert message.summary == "add login form"
    assert message.details == ["add form component", "wire up validation"]
    assert message.header == "✨ feat: add login form"


def test_parse_message_with_scope_and_no_emoji():
    message = CommitMessage.parse("fix(api): handle empty response")
    assert message.emoji is None
    assert message.type is CommitType.FIX
    assert message.summary == "handle empty response"
    assert message.details == []


@pytest.mark.parametrize("text", ["Update some files", "🎉 party: celebrate"])
def test_parse_unconventional_message(text):
    message = CommitMessage.parse(text)
    assert message.type is None
    assert message.summary == text
