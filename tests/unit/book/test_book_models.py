"""Unit tests for book.models module."""

from src.block_store.ids import normalize_id
from src.book.models import BookConfig, BuildConfig, Book, EmbeddedSourceFile, Page
from tests.fixtures import ROOT_ID, create_node, create_text


def make_tree():
    root = Page(title="Root", notion_id="r")
    a = Page(title="A", notion_id="a", parent=root)
    b = Page(title="B", notion_id="b", parent=root)
    a1 = Page(title="A1", notion_id="a1", parent=a)
    root.children = [a, b]
    a.children = [a1]
    return root, a, b, a1


class TestPage:
    """Test cases for Page."""

    def test_walk_is_depth_first(self):
        root, _, _, _ = make_tree()

        assert [p.title for p in root.walk()] == ["Root", "A", "A1", "B"]

    def test_depth(self):
        root, a, _, a1 = make_tree()

        assert root.depth == 0
        assert a.depth == 1
        assert a1.depth == 2

    def test_siblings(self):
        root, a, b, a1 = make_tree()

        assert a.siblings() == [a, b]
        assert a1.siblings() == [a1]
        assert root.siblings() == [root]

    def test_find_source_file_only_returns_existing_files(self):
        page = Page(title="P", notion_id="p", source_files=[
            EmbeddedSourceFile(embed_url="u1", file_exists=True),
            EmbeddedSourceFile(embed_url="u2", file_exists=False),
        ])

        assert page.find_source_file("u1") is page.source_files[0]
        assert page.find_source_file("u2") is None
        assert page.find_source_file("u3") is None

    def test_blocks_empty_without_source_node(self):
        assert Page(title="P", notion_id="p").blocks == []

    def test_from_node_copies_block_sequences(self):
        node = create_node(ROOT_ID, "Root", [create_text("A"), create_text("B")])

        page = Page.from_node(node)
        page.blocks.pop()
        page.block_ids.pop()

        assert page.title == "Root"
        assert page.notion_id == normalize_id(ROOT_ID)
        assert page.source_node is node
        assert len(node.blocks) == 2
        assert len(node.root.content_ids) == 2

    def test_repr_does_not_recurse_into_parent(self):
        _, a, _, _ = make_tree()

        assert "Root" not in repr(a)


class TestEmbeddedSourceFile:
    """Test cases for EmbeddedSourceFile."""

    def test_defaults_mark_file_absent(self):
        source_file = EmbeddedSourceFile(embed_url="u")

        assert source_file.file_exists is False
        assert source_file.lines == []
        assert source_file.path == ""

    def test_text_joins_lines(self):
        source_file = EmbeddedSourceFile(embed_url="u", lines=["a", "b"])

        assert source_file.text == "a\nb"


class TestBook:
    """Test cases for Book."""

    def test_pages_and_missing_source_files(self):
        root, a, _, a1 = make_tree()
        present = EmbeddedSourceFile(embed_url="u1", file_exists=True)
        missing = EmbeddedSourceFile(embed_url="u2")
        a.source_files = [present]
        a1.source_files = [missing]
        book = Book(title="Book", start_page_id="r", root_page=root)

        assert len(book.pages()) == 4
        assert book.source_files() == [present, missing]
        assert book.missing_source_files() == [(a1, missing)]


class TestBuildConfig:
    """Test cases for BuildConfig."""

    def test_get_book(self):
        go = BookConfig(name="go", start_page_id="1", source_tree="go.json")
        config = BuildConfig(books=[go])

        assert config.get_book("go") is go
        assert config.get_book("rust") is None

    def test_defaults(self):
        config = BuildConfig()

        assert config.source_root is None
        assert config.embed_repository == "essentialbooks/books"
        assert config.embed_branches == ["master", "notion"]
