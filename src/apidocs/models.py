"""Data models for API documentation extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Tag:
    """One @-annotation from a comment block."""

    type: str  # "param", "return", "memberOf", ...
    string: str = ""  # Text after the tag name
    types: list[str] | None = None  # From a {A|B} type expression
    name: str | None = None
    description: str | None = None
    parent: str | None = None  # @memberOf / @lends
    optional: bool = False
    visibility: str | None = None  # @api / @public / @private / @protected
    other_class: str | None = None  # @extends / @augments / @implements


@dataclass
class Description:
    """Free text of a comment block."""

    full: str = ""
    summary: str = ""
    body: str = ""


@dataclass
class CodeContext:
    """Symbol shape inferred from the code following a comment."""

    type: str  # "method" | "property" | "function" | "class" | "constructor" | "declaration"
    name: str
    string: str
    constructor: str | None = None  # A in A.prototype.b
    receiver: str | None = None  # A in A.b
    value: str | None = None


@dataclass
class CommentBlock:
    """Raw comment block as produced by the comment extractor."""

    description: Description = field(default_factory=Description)
    tags: list[Tag] = field(default_factory=list)
    ignore: bool = False  # /*! ... */
    is_private: bool = False  # @api private / @private
    line: int = 0
    code: str = ""  # First line of code after the comment
    ctx: CodeContext | None = None


@dataclass
class SourceFile:
    """Comment blocks loaded from one configured path."""

    path: str
    blocks: list[CommentBlock]


@dataclass
class ParamDoc:
    """A normalized @param or @event entry."""

    type: str  # "param" | "event"
    name: str | None = None
    string: str = ""  # Tag text after the tag name
    types: str | None = None  # "String|Number"
    description: str = ""  # Rendered HTML
    optional: bool = False
    nested: bool = False  # [opts.key] style name

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "string": self.string,
            "types": self.types,
            "description": self.description,
            "optional": self.optional,
            "nested": self.nested,
        }


@dataclass
class ReturnDoc:
    """A normalized @return entry."""

    string: str = ""
    types: list[str] | None = None
    description: str | None = None  # Raw markdown
    html: str = ""  # Rendered description

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "return",
            "string": self.string,
            "types": self.types,
            "description": self.description,
            "return": self.html,
        }


@dataclass
class Context:
    """Normalized record for one documented symbol."""

    constructor: str | None = None
    receiver: str | None = None
    name: str | None = None
    type: str | None = None
    string: str | None = None
    static: bool = False
    is_function: bool = False
    inherits: str | None = None
    returns: ReturnDoc | None = None
    param: list[ParamDoc] | None = None
    event: list[ParamDoc] | None = None
    anchor_id: str | None = None
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the keys the site templates read."""
        data: dict[str, Any] = {
            "constructor": self.constructor,
            "receiver": self.receiver,
            "name": self.name,
            "type": self.type,
            "string": self.string,
            "inherits": self.inherits,
            "anchorId": self.anchor_id,
        }
        data = {k: v for k, v in data.items() if v is not None}
        if self.static:
            data["static"] = True
        if self.is_function:
            data["isFunction"] = True
        if self.returns is not None:
            data["return"] = self.returns.to_dict()
        if self.param is not None:
            data["param"] = [p.to_dict() for p in self.param]
        if self.event is not None:
            data["event"] = [e.to_dict() for e in self.event]
        data["description"] = self.description
        return data


@dataclass
class FileRecord:
    """Documentation for one source file."""

    name: str  # Display name, e.g. "SchemaArray"
    file: str  # Original path, e.g. "lib/schema/array.js"
    edit_link: str
    props: list[Context] = field(default_factory=list)
    hide_from_nav: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "props": [p.to_dict() for p in self.props],
            "file": self.file,
            "editLink": self.edit_link,
        }
        if self.hide_from_nav:
            data["hideFromNav"] = True
        return data


@dataclass
class ApiDocs:
    """Everything the site generator needs for the API pages."""

    github: str
    docs: list[FileRecord] = field(default_factory=list)
    title: str = "API docs"
    api: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "docs": [d.to_dict() for d in self.docs],
            "github": self.github,
            "title": self.title,
            "api": self.api,
        }
