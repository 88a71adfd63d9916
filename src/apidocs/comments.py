"""Doc comment extraction for JavaScript sources.

Splits source text into JSDoc-style comment blocks: each /* */ block
becomes a CommentBlock with a description, a list of @-tags, flags, and the
symbol shape of the code that follows it.
"""

from __future__ import annotations

import re

from .errors import CommentParseError
from .models import CodeContext, CommentBlock, Description, Tag
from .render import render_markdown

_MARKER = re.compile(r"^[ \t]*\* ?", re.MULTILINE)
_TAG_NAME = re.compile(r"^@(\S+)[ \t]*")
_TYPE_EXPR = re.compile(r"^\{.*\}$", re.DOTALL)

# Tags whose text is "{types} name description"
_NAMED_TAGS = ("param", "property", "template")
# Tags whose text is "{types} description"
_TYPED_TAGS = ("return", "returns", "define", "throws")

_IDENT_CHAR = re.compile(r"[\w$.]")
_CLASS_DECL = re.compile(r"class\s+([\w$]+)")
# Members inside a class body: "close() {", "static create(", "get isNew() {"
_CLASS_MEMBER = re.compile(
    r"^\s*(static\s+)?(?:async\s+)?(get\s+|set\s+)?\*?\s*([\w$]+)\s*\("
)
_NOT_MEMBERS = {"if", "for", "while", "switch", "catch", "function", "return", "super"}

# (pattern, builder) pairs, tried in order against the first line of code.
_CONTEXT_PATTERNS = [
    (
        re.compile(r"^\s*(?:export\s+)?class\s+([\w$]+)"),
        lambda m: CodeContext(
            type="class", name=m[1], string=f"new {m[1]}()", constructor=m[1]
        ),
    ),
    (
        re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\s*\*?\s*([\w$]+)\s*\("),
        lambda m: CodeContext(type="function", name=m[1], string=f"{m[1]}()"),
    ),
    (
        re.compile(
            r"^\s*(?:export\s+)?(?:const|let|var)\s+([\w$]+)\s*=\s*(?:async\s+)?function"
        ),
        lambda m: CodeContext(type="function", name=m[1], string=f"{m[1]}()"),
    ),
    (
        re.compile(r"^\s*([\w$.]+)\.prototype\.([\w$]+)\s*=\s*(?:async\s+)?function"),
        lambda m: CodeContext(
            type="method",
            name=m[2],
            constructor=m[1],
            string=f"{m[1]}.prototype.{m[2]}()",
        ),
    ),
    (
        re.compile(r"^\s*([\w$.]+)\.prototype\.([\w$]+)\s*=\s*([^\n;]+)"),
        lambda m: CodeContext(
            type="property",
            name=m[2],
            constructor=m[1],
            value=m[3].strip(),
            string=f"{m[1]}.prototype.{m[2]}",
        ),
    ),
    (
        re.compile(r"^\s*([\w$.]+)\.([\w$]+)\s*=\s*(?:async\s+)?function"),
        lambda m: CodeContext(
            type="method", name=m[2], receiver=m[1], string=f"{m[1]}.{m[2]}()"
        ),
    ),
    (
        re.compile(r"^\s*([\w$.]+)\.([\w$]+)\s*=\s*([^\n;]+)"),
        lambda m: CodeContext(
            type="property",
            name=m[2],
            receiver=m[1],
            value=m[3].strip(),
            string=f"{m[1]}.{m[2]}",
        ),
    ),
    (
        re.compile(r"^\s*(?:const|let|var)\s+([\w$]+)\s*=\s*([^\n;]+)"),
        lambda m: CodeContext(
            type="declaration", name=m[1], value=m[2].strip(), string=m[1]
        ),
    ),
]


def parse_comments(source: str, raw: bool = True) -> list[CommentBlock]:
    """Extract every block comment from JavaScript source.

    Args:
        source: Full text of a .js file
        raw: Keep descriptions as markdown. When False, description
            fields are rendered to HTML.

    Returns:
        Comment blocks in source order

    Raises:
        CommentParseError: If a block comment is never closed.
    """
    blocks = []
    for start, end, owner in _iter_comment_spans(source):
        block = parse_comment(source[start + 2 : end - 2], raw=raw)
        block.line = source.count("\n", 0, start) + 1
        block.code = _first_code_line(source, end)
        block.ctx = parse_code_context(block.code, owner)
        blocks.append(block)
    return blocks


def parse_comment(text: str, raw: bool = True) -> CommentBlock:
    """Parse the inside of one comment (without the /* and */)."""
    block = CommentBlock()
    if text.startswith("!"):
        block.ignore = True
        text = text[1:]
    elif text.startswith("*"):
        text = text[1:]

    text = _MARKER.sub("", text).strip()

    description_lines: list[str] = []
    tag_texts: list[str] = []
    for line in text.split("\n"):
        if line.startswith("@"):
            tag_texts.append(line)
        elif tag_texts:
            tag_texts[-1] += "\n" + line
        else:
            description_lines.append(line)

    full = "\n".join(description_lines).strip()
    summary, _, body = full.partition("\n\n")
    if raw:
        block.description = Description(full=full, summary=summary, body=body.strip())
    else:
        block.description = Description(
            full=render_markdown(full),
            summary=render_markdown(summary),
            body=render_markdown(body.strip()),
        )

    block.tags = [parse_tag(t) for t in tag_texts]
    block.is_private = any(
        (t.type == "api" and t.visibility == "private") or t.type == "private"
        for t in block.tags
    )
    return block


def parse_tag(text: str) -> Tag:
    """Parse a single tag, e.g. "@param {String} [name] the name"."""
    m = _TAG_NAME.match(text)
    if m is None:
        return Tag(type="", string=text.strip())

    tag = Tag(type=m[1])
    rest = text[m.end() :]
    first_line, _, more = rest.partition("\n")
    parts = _split_parts(first_line)
    tag.string = rest.strip()

    if tag.type in _NAMED_TAGS:
        type_string = parts.pop(0) if parts and _TYPE_EXPR.match(parts[0]) else ""
        tag.name = parts.pop(0) if parts else ""
        tag.description = _join_description(parts, more)
        _parse_types(type_string, tag)
        if tag.name.startswith("[") and tag.name.endswith("]"):
            tag.optional = True
    elif tag.type in _TYPED_TAGS:
        type_string = parts.pop(0) if parts and _TYPE_EXPR.match(parts[0]) else ""
        _parse_types(type_string, tag)
        tag.description = _join_description(parts, more)
    elif tag.type in ("type", "enum", "typedef"):
        _parse_types(parts[0] if parts else "", tag)
    elif tag.type in ("memberOf", "lends"):
        tag.parent = parts[0] if parts else ""
    elif tag.type == "api":
        tag.visibility = parts[0] if parts else None
    elif tag.type in ("public", "private", "protected"):
        tag.visibility = tag.type
    elif tag.type in ("extends", "implements", "augments"):
        tag.other_class = parts[0] if parts else None
    else:
        tag.string = " ".join(_split_parts(rest))

    return tag


def parse_code_context(code: str, owner: str | None = None) -> CodeContext | None:
    """Infer what a comment documents from the code line after it.

    Args:
        code: First line of code after the comment
        owner: Name of the class whose body the comment sits in, if any
    """
    if owner is not None:
        m = _CLASS_MEMBER.match(code)
        if m and m[3] not in _NOT_MEMBERS:
            return _class_member(m, owner)
    for pattern, build in _CONTEXT_PATTERNS:
        m = pattern.match(code)
        if m:
            return build(m)
    return None


def _class_member(m: re.Match, owner: str) -> CodeContext:
    static, accessor, name = m[1], m[2], m[3]
    if name == "constructor" and not static:
        return CodeContext(
            type="constructor", name=owner, constructor=owner, string=f"new {owner}()"
        )
    qualified = f"{owner}.{name}" if static else f"{owner}.prototype.{name}"
    if accessor:
        return CodeContext(type="property", name=name, constructor=owner, string=qualified)
    return CodeContext(
        type="method", name=name, constructor=owner, string=f"{qualified}()"
    )


def _iter_comment_spans(source: str):
    """Yield (start, end, owner) for block comments, skipping strings.

    owner is the class whose body directly contains the comment, or None.
    """
    i = 0
    n = len(source)
    # One entry per open brace: the class it opens, or None
    scopes: list[str | None] = []
    pending_class = None
    while i < n:
        ch = source[i]
        if ch == "c" and (i == 0 or not _IDENT_CHAR.match(source[i - 1])):
            m = _CLASS_DECL.match(source, i)
            if m:
                pending_class = m[1]
                i = m.end()
                continue
            i += 1
        elif ch == "{":
            scopes.append(pending_class)
            pending_class = None
            i += 1
        elif ch == "}":
            if scopes:
                scopes.pop()
            i += 1
        elif ch in "'\"`":
            i = _skip_string(source, i)
        elif source.startswith("//", i):
            newline = source.find("\n", i)
            i = n if newline == -1 else newline
        elif source.startswith("/*", i):
            close = source.find("*/", i + 2)
            if close == -1:
                line = source.count("\n", 0, i) + 1
                raise CommentParseError(f"Unterminated comment at line {line}", line)
            yield i, close + 2, scopes[-1] if scopes else None
            i = close + 2
        else:
            i += 1


def _skip_string(source: str, start: int) -> int:
    """Return the offset just past the string literal opening at start."""
    quote = source[start]
    i = start + 1
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        # Only template literals span lines
        if ch == "\n" and quote != "`":
            return i
        i += 1
    return len(source)


def _first_code_line(source: str, offset: int) -> str:
    """First non-blank line after a comment, or "" if another comment follows."""
    for line in source[offset:].split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("/*") or stripped.startswith("//"):
            return ""
        return stripped
    return ""


def _split_parts(text: str) -> list[str]:
    """Split on whitespace, keeping {...} type expressions whole."""
    parts = []
    current = ""
    depth = 0
    for ch in text:
        if ch.isspace() and depth == 0:
            if current:
                parts.append(current)
            current = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
        current += ch
    if current:
        parts.append(current)
    return parts


def _join_description(parts: list[str], more: str) -> str:
    """Rejoin the first-line remainder with any continuation lines."""
    return "\n".join(filter(None, [" ".join(parts), more.strip()]))


def _parse_types(type_string: str, tag: Tag) -> None:
    """Fill tag.types (and tag.optional) from a {A|B=} expression."""
    expr = type_string.strip()
    if not expr:
        return
    if expr.startswith("{") and expr.endswith("}"):
        expr = expr[1:-1].strip()
    if expr.endswith("="):
        tag.optional = True
        expr = expr[:-1]
    if expr.startswith("(") and expr.endswith(")"):
        expr = expr[1:-1]

    types = []
    current = ""
    depth = 0
    for ch in expr:
        if ch in "(<[{":
            depth += 1
        elif ch in ")>]}":
            depth -= 1
        if ch == "|" and depth == 0:
            types.append(current.strip())
            current = ""
            continue
        current += ch
    types.append(current.strip())
    tag.types = [t.lstrip("?!").removeprefix("...") for t in types if t]
