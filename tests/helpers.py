"""Test helpers for building JavaScript doc comments."""


def doc_comment(*lines: str, opener: str = "/**") -> str:
    """
    Build a block comment with " * " markers.

    doc_comment("Saves.", "", "@api public") ->
        /**
         * Saves.
         *
         * @api public
         */
    """
    body = "".join(f" * {line}\n" if line else " *\n" for line in lines)
    return f"{opener}\n{body} */\n"


DOCUMENT_JS = (
    "'use strict';\n"
    "\n"
    + doc_comment(
        "The document's id.",
        "",
        "@api public",
        "@receiver Document",
        "@property {ObjectId} _id",
    )
    + "\n"
    + doc_comment(
        "Saves this document.",
        "",
        "@param {Object} [options]",
        "@param {Boolean} [options.validateBeforeSave] set to false to skip validation",
        "@return {Promise}",
        "@api public",
    )
    + "\n"
    "Document.prototype.save = function(options) {\n"
    "  return this.$__save(options);\n"
    "};\n"
    "\n"
    + doc_comment("ignore", opener="/*!")
    + "\n"
    "function internal() {}\n"
    "\n"
    + doc_comment("Helper.", "", "@api private")
    + "\n"
    "Document.prototype.$__save = function() {};\n"
)

OPTIONS_JS = (
    doc_comment(
        "The options defined on all schema types.",
        "",
        "@api public",
        "@constructor SchemaTypeOptions",
    )
    + "\n"
    "class SchemaTypeOptions {\n"
    "}\n"
)
