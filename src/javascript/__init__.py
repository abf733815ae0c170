"""JavaScript parsing for binding expressions and script documents."""

from javascript.document import (
    JavaScriptDocument,
    decode_escape_sequence,
    parse_javascript,
)
from javascript.parser import (
    JsProgram,
    NodeKind,
    NodeLocation,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    node_kind,
    parse_js,
    unwrap_parentheses,
)

__all__ = [
    "JavaScriptDocument",
    "JsProgram",
    "NodeKind",
    "NodeLocation",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "decode_escape_sequence",
    "node_kind",
    "parse_javascript",
    "parse_js",
    "unwrap_parentheses",
]
