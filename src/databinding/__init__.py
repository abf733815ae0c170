"""Data-binding expression scanning for HTML templates."""

from databinding.extractors import (
    JsLiteralResult,
    extract_from_attribute,
    extract_from_js_literal,
    extract_from_text_node,
    parse_expression,
)
from databinding.ranges import find_newline_indexes, indexes_to_source_range
from databinding.scan import ScanResult, scan_document, scan_template
from databinding.scanner import RawBinding, find_bindings
from databinding.templates import (
    data_binding_template_predicate,
    get_all_data_binding_templates,
    is_data_binding_template,
)
from databinding.validator import extract_properties_and_validate

__all__ = [
    "JsLiteralResult",
    "RawBinding",
    "ScanResult",
    "data_binding_template_predicate",
    "extract_from_attribute",
    "extract_from_js_literal",
    "extract_from_text_node",
    "extract_properties_and_validate",
    "find_bindings",
    "find_newline_indexes",
    "get_all_data_binding_templates",
    "indexes_to_source_range",
    "is_data_binding_template",
    "parse_expression",
    "scan_document",
    "scan_template",
]
