"""Display names for documented source files."""

from __future__ import annotations

# Applied in order; each removes the first occurrence only.
_STRIP = ("lib/", ".js", "/index", "/methods")

# Not systematic, so kept as literal lookups.
_FULL_PATH_OVERRIDES = {
    "schema/array": "SchemaArray",
}
_NAME_OVERRIDES = {
    "core_array": "array",
    "documentarray": "DocumentArrayPath",
    "DocumentArray": "MongooseDocumentArray",
}


def resolve_name(path: str) -> str:
    """Derive the page name for a source path.

    Examples:
        lib/document.js -> Document
        lib/schema/array.js -> SchemaArray
        lib/types/DocumentArray/methods/index.js -> MongooseDocumentArray
    """
    full_name = path
    for part in _STRIP:
        full_name = full_name.replace(part, "", 1)

    name = full_name.rsplit("/", 1)[-1]
    name = _NAME_OVERRIDES.get(name, name)
    name = _FULL_PATH_OVERRIDES.get(full_name, name)

    if name and name[0].upper() != name[0]:
        name = name[0].upper() + name[1:]
    return name
