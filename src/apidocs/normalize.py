"""Fold comment tags into one normalized Context per documented symbol.

Each tag type has a handler that takes the Context built so far and returns
a new one. Tags are applied left to right, so a later tag overwrites what an
earlier one derived. A few fixups run once all tags are folded, to repair
inconsistencies that depend on tag order (e.g. @property before @memberOf).
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from functools import reduce
from typing import Callable

from .models import CodeContext, CommentBlock, Context, ParamDoc, ReturnDoc, Tag
from .render import render_inline, render_markdown

log = logging.getLogger(__name__)

TagHandler = Callable[[Context, Tag], Context]

_TYPE_PREFIX = re.compile(r"^\{(\w+)\}\s*")
_DOUBLED_PROTOTYPE = re.compile(r"\.prototype[^.]")
_LINE_BREAK = re.compile(r"<br />", re.IGNORECASE)
_ESCAPED_GT = re.compile(r"&gt;", re.IGNORECASE)


def _prototype_string(constructor: str | None, name: str | None) -> str:
    """Constructor.prototype.name, or just name when there is no owner."""
    if constructor is None:
        return name or ""
    return f"{constructor}.prototype.{name or ''}"


def _static_string(constructor: str | None, name: str | None) -> str:
    if constructor is None:
        return name or ""
    return f"{constructor}.{name or ''}"


def _is_nested(name: str | None) -> bool:
    """True for optional dotted names such as [options.lean]."""
    return (
        name is not None
        and name.startswith("[")
        and name.endswith("]")
        and "." in name
    )


# =============================================================================
# TAG HANDLERS
# =============================================================================


def _on_receiver(ctx: Context, tag: Tag) -> Context:
    return replace(ctx, constructor=tag.string)


def _on_property(ctx: Context, tag: Tag) -> Context:
    # "{ObjectId} _id" -> type ObjectId, name _id; anything else is the name
    text = tag.string
    prop_type = "property"
    m = _TYPE_PREFIX.match(text)
    if m:
        prop_type = m[1]
        text = text[m.end() :]
    return replace(
        ctx,
        type=prop_type,
        name=text,
        string=_prototype_string(ctx.constructor, text),
    )


def _on_type(ctx: Context, tag: Tag) -> Context:
    return replace(ctx, type="|".join(tag.types) if tag.types is not None else None)


def _on_static(ctx: Context, tag: Tag) -> Context:
    # @static carries no name; it comes from @function or the code
    return replace(
        ctx,
        type="property",
        static=True,
        string=_static_string(ctx.constructor, ctx.name),
    )


def _on_function(ctx: Context, tag: Tag) -> Context:
    return replace(
        ctx,
        type="function",
        static=True,
        name=tag.string,
        string=_static_string(ctx.constructor, tag.string),
        is_function=True,
    )


def _on_return(ctx: Context, tag: Tag) -> Context:
    returns = ReturnDoc(
        string=tag.string,
        types=tag.types,
        description=tag.description,
        html=render_inline(tag.description),
    )
    return replace(ctx, returns=returns)


def _on_inherits(ctx: Context, tag: Tag) -> Context:
    return replace(ctx, inherits=tag.string)


def _on_param(ctx: Context, tag: Tag) -> Context:
    # Handles both @param and @event; tag.type picks the list
    entry = ParamDoc(
        type=tag.type,
        name=tag.name if tag.name is not None else tag.string,
        string=tag.string,
        types="|".join(tag.types) if tag.types else None,
        description=render_inline(tag.description),
        optional=tag.optional,
        nested=_is_nested(tag.name),
    )
    existing = getattr(ctx, tag.type) or []
    return replace(ctx, **{tag.type: [*existing, entry]})


def _on_method(ctx: Context, tag: Tag) -> Context:
    return replace(
        ctx,
        type="method",
        name=tag.string,
        string=_prototype_string(ctx.constructor, tag.string),
        is_function=True,
    )


def _on_member_of(ctx: Context, tag: Tag) -> Context:
    return replace(
        ctx,
        constructor=tag.parent,
        string=_prototype_string(tag.parent, ctx.name),
        is_function=ctx.is_function or ctx.type == "method",
    )


def _on_constructor(ctx: Context, tag: Tag) -> Context:
    return replace(ctx, string=tag.string, name=tag.string, is_function=True)


TAG_HANDLERS: dict[str, TagHandler] = {
    "receiver": _on_receiver,
    "property": _on_property,
    "type": _on_type,
    "static": _on_static,
    "function": _on_function,
    "return": _on_return,
    "inherits": _on_inherits,
    "event": _on_param,
    "param": _on_param,
    "method": _on_method,
    "memberOf": _on_member_of,
    "constructor": _on_constructor,
}


def apply_tag(ctx: Context, tag: Tag) -> Context:
    """Apply one tag. Unknown tag types leave the Context unchanged."""
    handler = TAG_HANDLERS.get(tag.type)
    if handler is None:
        return ctx
    return handler(ctx, tag)


def fold_tags(tags: list[Tag], start: Context | None = None) -> Context:
    """Reduce tags, in order, into a Context."""
    return reduce(apply_tag, tags, start if start is not None else Context())


# =============================================================================
# FIXUPS
# =============================================================================


def ensure_call_parens(ctx: Context) -> Context:
    """Functions are identified as name(); never appends twice."""
    string = ctx.string or ""
    if ctx.is_function and not string.endswith("()"):
        return replace(ctx, string=string + "()")
    return ctx


def repair_prototype(ctx: Context) -> Context:
    """Rebuild strings like "A.prototypeb" left by tag ordering."""
    if ctx.string and _DOUBLED_PROTOTYPE.search(ctx.string):
        repaired = replace(ctx, string=_prototype_string(ctx.constructor, ctx.name))
        return ensure_call_parens(repaired)
    return ctx


def anchor_id(ctx: Context) -> str:
    """Slug for the symbol's position on the page.

    Constructor-qualified beats receiver-qualified beats the bare name.
    """
    name = ctx.name or ""
    if ctx.constructor is not None:
        return f"{ctx.constructor.lower()}_{ctx.constructor}-{name}"
    if ctx.receiver is not None:
        return f"{ctx.receiver.lower()}_{ctx.receiver}.{name}"
    return f"{name.lower()}_{name}"


def render_description(full: str) -> str:
    text = _LINE_BREAK.sub(" ", full)
    text = _ESCAPED_GT.sub(">", text)
    return render_markdown(text)


def finalize(ctx: Context, description: str) -> Context:
    """Run the post-fold fixups and attach the rendered description."""
    ctx = ensure_call_parens(ctx)
    ctx = repair_prototype(ctx)
    return replace(
        ctx,
        anchor_id=anchor_id(ctx),
        description=render_description(description),
    )


# =============================================================================
# BLOCKS
# =============================================================================


def context_from_code(code: CodeContext | None) -> Context:
    """Seed a Context with what the code after the comment says."""
    if code is None:
        return Context()
    return Context(
        constructor=code.constructor,
        receiver=code.receiver,
        name=code.name,
        type=code.type,
        string=code.string,
    )


def normalize_block(block: CommentBlock) -> Context | None:
    """Build the Context for one comment, or None if it is not public."""
    if block.ignore or block.is_private:
        log.debug(
            "Skipping %s comment at line %d",
            "ignored" if block.ignore else "private",
            block.line,
        )
        return None
    ctx = fold_tags(block.tags, context_from_code(block.ctx))
    return finalize(ctx, block.description.full)


def normalize_blocks(blocks: list[CommentBlock]) -> list[Context]:
    """Contexts for every public block, in source order."""
    contexts = []
    for block in blocks:
        ctx = normalize_block(block)
        if ctx is not None:
            contexts.append(ctx)
    return contexts
