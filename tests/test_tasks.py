"""Tests for the block and work item models."""

from datetime import datetime, timezone

import pytest

from taskgram.core.blocks import ContentNode, NodeKind, parse_timestamp, rich_text
from taskgram.core.tasks import Account, WorkItem, find_account
from taskgram.errors import TitleUnavailable

from conftest import NOW, ago, work_item


def block(type_: str, text: str = "hello", edited: str = "2025-01-15T10:00:00.000Z", **extra) -> dict:
    data = {
        "object": "block",
        "id": "b1",
        "type": type_,
        "last_edited_time": edited,
        type_: {"rich_text": [{"type": "text", "plain_text": text, "text": {"content": text}}]},
    }
    data.update(extra)
    return data


class TestParseTimestamp:
    def test_zulu(self):
        assert parse_timestamp("2025-01-15T10:00:00.000Z") == datetime(2025, 1, 15, 10, tzinfo=timezone.utc)

    def test_offset_normalised_to_utc(self):
        ts = parse_timestamp("2025-01-15T12:00:00+02:00")
        assert ts == datetime(2025, 1, 15, 10, tzinfo=timezone.utc)
        assert ts.tzinfo == timezone.utc


class TestRichText:
    def test_concatenates_fragments(self):
        fragments = [{"plain_text": "Hello, "}, {"plain_text": "world"}]
        assert rich_text(fragments) == "Hello, world"

    def test_falls_back_to_text_content(self):
        assert rich_text([{"type": "text", "text": {"content": "abc"}}]) == "abc"

    def test_empty(self):
        assert rich_text(None) == ""
        assert rich_text([]) == ""


class TestContentNode:
    @pytest.mark.parametrize(
        "type_,kind",
        [
            ("heading_1", NodeKind.HEADING_1),
            ("heading_2", NodeKind.HEADING_2),
            ("heading_3", NodeKind.HEADING_3),
            ("paragraph", NodeKind.PARAGRAPH),
            ("bulleted_list_item", NodeKind.BULLETED_LIST_ITEM),
            ("numbered_list_item", NodeKind.NUMBERED_LIST_ITEM),
        ],
    )
    def test_known_kinds(self, type_, kind):
        n = ContentNode.from_api(block(type_, "Done"))
        assert n.kind is kind
        assert n.text == "Done"

    def test_unknown_kind_is_unsupported(self):
        data = {
            "id": "b9",
            "type": "to_do",
            "last_edited_time": "2025-01-15T10:00:00.000Z",
            "to_do": {"rich_text": [{"plain_text": "x"}], "checked": False},
        }
        n = ContentNode.from_api(data)
        assert n.kind is NodeKind.UNSUPPORTED
        assert n.text == ""
        assert not n.kind.is_heading
        assert not n.kind.is_note

    def test_legacy_text_field(self):
        data = {
            "id": "b2",
            "type": "paragraph",
            "last_edited_time": "2025-01-15T10:00:00.000Z",
            "paragraph": {"text": [{"plain_text": "old api"}]},
        }
        assert ContentNode.from_api(data).text == "old api"

    def test_from_api_ignores_child_flag(self):
        n = ContentNode.from_api(block("paragraph", has_children=True))
        assert n == ContentNode("b1", NodeKind.PARAGRAPH, "hello", parse_timestamp("2025-01-15T10:00:00.000Z"))

    def test_kind_groups(self):
        assert NodeKind.HEADING_3.is_heading
        assert not NodeKind.HEADING_3.is_note
        assert NodeKind.NUMBERED_LIST_ITEM.is_note

    def test_edited_after_is_strict(self):
        n = ContentNode.from_api(block("paragraph", edited="2025-01-15T12:00:00.000Z"))
        assert not n.edited_after(NOW)
        assert n.edited_after(ago(seconds=1))
        assert n.edited_after(None)


class TestWorkItem:
    def test_from_api(self):
        item = WorkItem.from_api(
            {
                "id": "p1",
                "url": "https://www.notion.so/p1",
                "last_edited_time": "2025-01-15T10:00:00.000Z",
                "properties": {"Description": {"type": "title", "title": [{"plain_text": "Fix login"}]}},
            }
        )
        assert item.id == "p1"
        assert item.title() == "Fix login"
        assert item.last_edited == ago(hours=2)

    def test_title_missing_property(self):
        with pytest.raises(TitleUnavailable):
            work_item("p1").title()

    def test_title_wrong_kind(self):
        item = work_item("p1")
        item.properties["Description"] = {"type": "rich_text", "rich_text": []}
        with pytest.raises(TitleUnavailable):
            item.title()

    def test_empty_title(self):
        item = work_item("p1")
        item.properties["Description"] = {"type": "title", "title": []}
        assert item.title() == ""

    def test_custom_title_property(self):
        item = work_item("p1")
        item.properties["Name"] = {"type": "title", "title": [{"plain_text": "Named"}]}
        assert item.title("Name") == "Named"

    def test_tags(self):
        assert work_item("p1", "t", tags=["Backend", "Infra"]).tags() == ["Backend", "Infra"]

    def test_tags_missing_property(self):
        assert work_item("p1", "t").tags() == []

    def test_tags_wrong_kind(self):
        item = work_item("p1", "t")
        item.properties["Project"] = {"type": "select", "select": {"name": "X"}}
        assert item.tags() == []

    def test_edited_within_is_open_interval(self):
        item = work_item("p1", "t", edited=ago(hours=1))
        assert item.edited_within(ago(hours=2), NOW)
        assert not item.edited_within(ago(hours=1), NOW)
        assert not item.edited_within(ago(hours=3), ago(hours=1))


class TestHelpers:
    def test_find_account_exact_match(self):
        accounts = [Account("u1", "jane"), Account("u2", "Jane Doe")]
        assert find_account(accounts, "Jane Doe").id == "u2"
        assert find_account(accounts, "jane doe") is None

    def test_account_from_api_keeps_id_and_name(self):
        account = Account.from_api({"object": "user", "id": "u1", "type": "bot", "name": None})
        assert account == Account("u1", "")
