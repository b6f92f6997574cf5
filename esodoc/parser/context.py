"""Per-section scratch state of the documentation parser."""

from dataclasses import dataclass
from typing import List, Optional

from esodoc.schemas import ApiFunction, ApiObject, XmlElement


@dataclass
class ParserContext:
    """
    The "current" entities of the section being read.

    A fresh context is created on every section transition, so nothing leaks
    from one section into the next.
    """
    current_enum: Optional[List[str]] = None
    current_function: Optional[ApiFunction] = None
    current_object: Optional[ApiObject] = None
    current_element: Optional[XmlElement] = None
