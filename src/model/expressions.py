"""Data-binding expression records.

One record type covers every binding site. Site-specific data lives in
``BindingExpression.site``, a union discriminated by ``kind``. Owning node
references are kept for callers but never serialized.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from tree_sitter import Node

from markup.document import HtmlAttribute, HtmlNode
from model.diagnostics import Diagnostic
from model.source import SourceRange

BindingDirection = Literal["{", "["]


class PropertyReference(BaseModel):
    """A top-level model property referenced by an expression."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_range: SourceRange


class TextNodeSite(BaseModel):
    """Binding inside an HTML text node."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["text-node"] = "text-node"
    direction: BindingDirection
    node: HtmlNode = Field(exclude=True, repr=False)


class AttributeSite(BaseModel):
    """Binding inside an attribute value."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["attribute"] = "attribute"
    direction: BindingDirection
    attribute_name: str
    is_complete_binding: bool = Field(
        description=(
            "True when the delimiters span the whole value, e.g. foo=\"{{bar}}\"; "
            "such bindings set the property rather than the attribute"
        )
    )
    event_name: str | None = Field(
        default=None,
        description="Event named with the {{prop::event}} two-way syntax",
    )
    node: HtmlNode = Field(exclude=True, repr=False)
    attribute: HtmlAttribute = Field(exclude=True, repr=False)


class JsLiteralSite(BaseModel):
    """Binding written as a string literal in script."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["js-literal"] = "js-literal"
    node: Node = Field(exclude=True, repr=False)


BindingSite = Annotated[
    TextNodeSite | AttributeSite | JsLiteralSite,
    Field(discriminator="kind"),
]


class BindingExpression(BaseModel):
    """A parsed data-binding expression.

    ``properties`` lists the top-level properties referenced, e.g. in
    ``{{foo(bar, baz.zod)}}`` they are foo, bar, and baz (but not zod).
    ``warnings`` holds the validation problems found while building it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source_range: SourceRange
    expression_text: str
    site: BindingSite
    properties: tuple[PropertyReference, ...] = ()
    warnings: tuple[Diagnostic, ...] = ()

    @property
    def kind(self) -> str:
        return self.site.kind

    @property
    def direction(self) -> BindingDirection | None:
        return getattr(self.site, "direction", None)

    @property
    def property_names(self) -> list[str]:
        return [prop.name for prop in self.properties]


__all__ = [
    "AttributeSite",
    "BindingDirection",
    "BindingExpression",
    "BindingSite",
    "JsLiteralSite",
    "PropertyReference",
    "TextNodeSite",
]
