"""Unit tests for book.meta_extractor module."""

import pytest

from src.block_store.ids import normalize_id
from src.block_store.models import Block, InlineRun
from src.book.errors import MalformedDirectiveError, UnknownMetaKeyError
from src.book.meta_extractor import MetaExtractor, is_directive_block, parse_meta_value
from src.book.models import Page
from tests.fixtures import ROOT_ID, create_code, create_directive, create_node, create_text


def make_page(blocks):
    return Page.from_node(create_node(ROOT_ID, "Page", blocks))


class TestIsDirectiveBlock:
    """Test cases for the directive predicate."""

    def test_plain_dollar_text_is_directive(self):
        assert is_directive_block(create_text("$id: 59")) is True

    def test_surrounding_whitespace_is_ignored(self):
        assert is_directive_block(create_text("\n  $id: 59  \n")) is True

    def test_formatted_run_is_not_directive(self):
        assert is_directive_block(create_text("$id: 59", marks=["b"])) is False

    def test_multiple_runs_are_not_directive(self):
        block = Block(id="x", type="text", inline_content=[
            InlineRun(text="$id: "), InlineRun(text="59"),
        ])
        assert is_directive_block(block) is False

    def test_short_text_is_not_directive(self):
        assert is_directive_block(create_text("$a:")) is False

    def test_text_not_starting_with_dollar_is_not_directive(self):
        assert is_directive_block(create_text("costs $5: cheap")) is False

    def test_non_text_block_is_not_directive(self):
        assert is_directive_block(create_code("$id: 59")) is False


class TestParseMetaValue:
    """Test cases for parse_meta_value."""

    def test_key_is_lowered_and_trimmed_value_trimmed(self):
        meta = parse_meta_value(create_text("$Id :  59 "))

        assert meta.key == "$id"
        assert meta.value == "59"

    def test_splits_on_first_colon_only(self):
        meta = parse_meta_value(create_text("$search: a:b, c"))

        assert meta.value == "a:b, c"

    def test_non_directive_returns_none(self):
        assert parse_meta_value(create_text("Plain paragraph")) is None

    def test_missing_colon_raises(self):
        with pytest.raises(MalformedDirectiveError) as exc_info:
            parse_meta_value(create_text("$id 59"), "abc")

        assert exc_info.value.page_id == "abc"
        assert "$id 59" in str(exc_info.value)


class TestMetaExtractor:
    """Test cases for MetaExtractor.extract()."""

    def test_assigns_recognized_keys(self):
        page = make_page([
            create_directive("Id", "59"),
            create_directive("SOId", "1234"),
            create_directive("Search", "a, b , c"),
        ])

        MetaExtractor().extract(page)

        assert page.id == "59"
        assert page.stack_overflow_id == "1234"
        assert page.search == ["a", "b", "c"]

    def test_score_is_ignored(self):
        page = make_page([create_directive("score", "10"), create_text("Body")])

        MetaExtractor().extract(page)

        assert page.id == ""
        assert [b.get_text_content() for b in page.blocks] == ["Body"]

    def test_removes_directive_blocks_keeping_order(self):
        page = make_page([
            create_text("First"),
            create_directive("id", "1"),
            create_text("Second"),
            create_directive("search", "x"),
            create_text("Third"),
        ])

        MetaExtractor().extract(page)

        assert [b.get_text_content() for b in page.blocks] == ["First", "Second", "Third"]
        assert page.block_ids == [b.id for b in page.blocks]
        assert not any(is_directive_block(b) for b in page.blocks)

    def test_source_node_is_not_modified(self):
        page = make_page([create_directive("id", "1"), create_text("Body")])

        MetaExtractor().extract(page)

        assert len(page.source_node.blocks) == 2
        assert len(page.source_node.root.content_ids) == 2
        assert [b.get_text_content() for b in page.blocks] == ["Body"]

    def test_second_run_is_noop(self):
        page = make_page([create_directive("id", "1"), create_text("Body")])
        extractor = MetaExtractor()

        extractor.extract(page)
        blocks_after_first = list(page.blocks)
        extractor.extract(page)

        assert page.blocks == blocks_after_first
        assert page.id == "1"

    def test_unknown_key_raises_with_page_id(self):
        page = make_page([create_directive("bogus", "x")])

        with pytest.raises(UnknownMetaKeyError) as exc_info:
            MetaExtractor().extract(page)

        assert exc_info.value.key == "$bogus"
        assert "bogus" in str(exc_info.value)
        assert normalize_id(ROOT_ID) in str(exc_info.value)

    def test_missing_colon_raises(self):
        page = make_page([create_text("$id 59")])

        with pytest.raises(MalformedDirectiveError):
            MetaExtractor().extract(page)

    def test_last_directive_wins(self):
        page = make_page([create_directive("id", "1"), create_directive("id", "2")])

        MetaExtractor().extract(page)

        assert page.id == "2"

    def test_page_without_source_node_is_ignored(self):
        page = Page(title="Empty", notion_id="x")

        MetaExtractor().extract(page)

        assert page.blocks == []
