from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MarkNode(BaseModel):
    """Inline formatting applied to a text node (strong, em, link, ...)."""
    type: str = Field(..., description="Mark type")
    attrs: Optional[Dict[str, Any]] = Field(default=None, description="Mark attributes")


class DocumentNode(BaseModel):
    """
    Node of an Atlassian Document Format tree, used by rich text fields such as
    description and environment in the REST v3 dialect.
    """
    version: Optional[int] = Field(default=None, description="Document version, only set on the root node")
    type: str = Field(..., description="Node type, e.g. doc, paragraph, text")
    content: Optional[List["DocumentNode"]] = Field(default=None, description="Child nodes")
    text: Optional[str] = Field(default=None, description="Text of a text node")
    attrs: Optional[Dict[str, Any]] = Field(default=None, description="Node attributes")
    marks: Optional[List[MarkNode]] = Field(default=None, description="Marks of a text node")

    def append_node(self, node: "DocumentNode") -> None:
        if self.content is None:
            self.content = []
        self.content.append(node)

    # PUBLIC_INTERFACE
    @classmethod
    def paragraphs(cls, *lines: str) -> "DocumentNode":
        """Build a version 1 document holding one paragraph per line."""
        doc = cls(version=1, type="doc")
        for line in lines:
            doc.append_node(cls(type="paragraph", content=[cls(type="text", text=line)]))
        return doc
