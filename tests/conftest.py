"""Shared pytest configuration for apidocs tests."""

from pathlib import Path

import pytest

from apidocs.config import FILES


@pytest.fixture
def make_tree(tmp_path):
    """
    Write source files under a temporary root.

    Example:
        def test_something(make_tree):
            root = make_tree({"lib/document.js": "..."})
    """

    def _make(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def full_tree(make_tree):
    """Every configured file, each with one documented function."""
    files = {}
    for i, rel in enumerate(FILES):
        files[rel] = (
            "/**\n"
            f" * Function number {i}.\n"
            " */\n"
            "\n"
            f"exports.fn{i} = function() {{}};\n"
        )
    return make_tree(files)
