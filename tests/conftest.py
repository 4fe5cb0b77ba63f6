"""Root pytest configuration for all tests."""

import pytest

from tests.fixtures.page_trees import create_sample_tree


@pytest.fixture
def sample_tree():
    """Identifier-to-node mapping of a fresh depth-3 sample tree."""
    return create_sample_tree()


@pytest.fixture
def books_checkout(tmp_path):
    """Source root holding books/go/0020-basic-types/booleans.go."""
    source_dir = tmp_path / "books" / "go" / "0020-basic-types"
    source_dir.mkdir(parents=True)
    (source_dir / "booleans.go").write_text(
        "// +build ignore\n"
        "\n"
        "package main\n"
        "\n"
        "// :show start\n"
        "var b bool = true\n"
        "// :show end\n"
        "\n"
        "func main() {\n"
        "\tfmt.Println(b) // :show line\n"
        "}\n",
        encoding="utf-8",
    )
    return tmp_path
