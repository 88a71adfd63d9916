"""Tests for loading, packaging and the full build."""

import logging

import pytest

from apidocs.config import EDIT_LINK_BASE, FILES, GITHUB_URL, DocsConfig
from apidocs.errors import CommentParseError, SourceLoadError
from apidocs.loader import load_sources
from apidocs.models import Context
from apidocs.packaging import build_api_docs, sort_props
from tests.helpers import DOCUMENT_JS, OPTIONS_JS

DOCUMENT = "lib/document.js"
OPTIONS = "lib/options/SchemaTypeOptions.js"


@pytest.fixture
def docs_root(make_tree):
    return make_tree({DOCUMENT: DOCUMENT_JS, OPTIONS: OPTIONS_JS})


class TestSorting:
    def test_sorted_by_string(self):
        props = [Context(string="b"), Context(string="A"), Context(string="a")]
        assert [p.string for p in sort_props(props)] == ["A", "a", "b"]

    def test_ties_keep_encounter_order(self):
        first = Context(name="first", string="Model.find()")
        second = Context(name="second", string="Model.find()")
        other = Context(name="other", string="Model.count()")
        result = sort_props([first, other, second])
        assert [p.name for p in result] == ["other", "first", "second"]
        assert sort_props([first, other, second]) == result

    def test_missing_string_sorts_first(self):
        props = [Context(string="a"), Context(name="x")]
        assert [p.name for p in sort_props(props)] == ["x", None]


class TestLoader:
    def test_preserves_order(self, docs_root):
        sources = load_sources([OPTIONS, DOCUMENT], docs_root)
        assert [s.path for s in sources] == [OPTIONS, DOCUMENT]
        assert len(sources[1].blocks) == 4

    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(SourceLoadError) as exc:
                load_sources(["lib/missing.js"], tmp_path)
        assert exc.value.path == "lib/missing.js"
        assert isinstance(exc.value.__cause__, FileNotFoundError)
        assert "lib/missing.js" in caplog.text

    def test_parse_failure(self, make_tree):
        root = make_tree({"lib/broken.js": "/** unterminated\n"})
        with pytest.raises(SourceLoadError) as exc:
            load_sources(["lib/broken.js"], root)
        assert isinstance(exc.value.__cause__, CommentParseError)

    def test_fails_fast(self, make_tree):
        root = make_tree({DOCUMENT: DOCUMENT_JS, "lib/broken.js": "/**"})
        with pytest.raises(SourceLoadError) as exc:
            build_api_docs(DocsConfig(root=root, files=["lib/broken.js", DOCUMENT]))
        assert exc.value.path == "lib/broken.js"


class TestBuild:
    def test_file_records(self, docs_root):
        docs = build_api_docs(DocsConfig(root=docs_root, files=[DOCUMENT, OPTIONS]))

        assert docs.title == "API docs"
        assert docs.api is True
        assert docs.github == GITHUB_URL
        assert [d.name for d in docs.docs] == ["Document", "SchemaTypeOptions"]
        assert [d.file for d in docs.docs] == [DOCUMENT, OPTIONS]
        assert docs.docs[0].edit_link == EDIT_LINK_BASE + DOCUMENT
        assert docs.docs[0].hide_from_nav is False
        assert docs.docs[1].hide_from_nav is True

    def test_document_props(self, docs_root):
        docs = build_api_docs(DocsConfig(root=docs_root, files=[DOCUMENT]))
        props = docs.docs[0].props

        assert [p.string for p in props] == [
            "Document.prototype._id",
            "Document.prototype.save()",
        ]
        id_prop, save = props
        assert id_prop.type == "ObjectId"
        assert id_prop.anchor_id == "document_Document-_id"

        assert save.anchor_id == "document_Document-save"
        assert [p.name for p in save.param] == [
            "[options]",
            "[options.validateBeforeSave]",
        ]
        assert [p.nested for p in save.param] == [False, True]
        assert save.param[1].description == "set to false to skip validation"
        assert save.returns.types == ["Promise"]
        assert save.description == "<p>Saves this document.</p>"

    def test_constructor_page(self, docs_root):
        docs = build_api_docs(DocsConfig(root=docs_root, files=[OPTIONS]))
        (ctor,) = docs.docs[0].props
        assert ctor.string == "SchemaTypeOptions()"
        assert ctor.anchor_id == (
            "schematypeoptions_SchemaTypeOptions-SchemaTypeOptions"
        )

    def test_repeated_builds_match(self, docs_root):
        config = DocsConfig(root=docs_root, files=[DOCUMENT, OPTIONS])
        assert build_api_docs(config).to_dict() == build_api_docs(config).to_dict()

    def test_default_files(self, full_tree):
        docs = build_api_docs(DocsConfig(root=full_tree))
        assert [d.file for d in docs.docs] == FILES
        hidden = [d.file for d in docs.docs if d.hide_from_nav]
        assert hidden == [f for f in FILES if f.startswith("lib/options/")]
        names = [d.name for d in docs.docs]
        assert "SchemaArray" in names
        assert "MongooseDocumentArray" in names


class TestSerialization:
    def test_to_dict(self, docs_root):
        docs = build_api_docs(DocsConfig(root=docs_root, files=[DOCUMENT, OPTIONS]))
        data = docs.to_dict()

        assert set(data) == {"docs", "github", "title", "api"}
        document, options = data["docs"]
        assert "hideFromNav" not in document
        assert options["hideFromNav"] is True
        assert document["editLink"] == EDIT_LINK_BASE + DOCUMENT

        save = document["props"][1]
        assert "isFunction" not in save
        assert save["anchorId"] == "document_Document-save"
        assert save["return"]["type"] == "return"
        assert save["return"]["return"] == ""
        assert save["param"][1]["nested"] is True
        assert "static" not in save

    def test_function_flags(self, make_tree):
        source = (
            "/**\n"
            " * Finds documents.\n"
            " *\n"
            " * @receiver Model\n"
            " * @function find\n"
            " * @static\n"
            " */\n"
        )
        root = make_tree({"lib/model.js": source})
        docs = build_api_docs(DocsConfig(root=root, files=["lib/model.js"]))
        (prop,) = docs.to_dict()["docs"][0]["props"]
        assert prop["string"] == "Model.find()"
        assert prop["isFunction"] is True
        assert prop["static"] is True
        assert prop["anchorId"] == "model_Model-find"

    def test_entries_keep_tag_text(self, make_tree):
        source = (
            "/**\n"
            " * Runs a query.\n"
            " *\n"
            " * @param {Object} [filter] the filter\n"
            " * @param {Boolean} [options.lean] return plain objects\n"
            " * @event data\n"
            " * @return {Query} this\n"
            " * @receiver Model\n"
            " * @function find\n"
            " */\n"
        )
        root = make_tree({"lib/model.js": source})
        docs = build_api_docs(DocsConfig(root=root, files=["lib/model.js"]))
        (prop,) = docs.to_dict()["docs"][0]["props"]

        assert [p["string"] for p in prop["param"]] == [
            "{Object} [filter] the filter",
            "{Boolean} [options.lean] return plain objects",
        ]
        assert prop["event"][0]["string"] == "data"
        assert prop["event"][0]["name"] == "data"
        assert prop["return"]["string"] == "{Query} this"
        assert prop["return"]["description"] == "this"
        assert prop["return"]["return"] == "this"
