"""
Render instructions queued by the schema planner.

The planner decides what to render and in which order; the renderer later
turns each instruction into schema nodes. Every variant carries a ``kind``
tag that the renderer dispatches on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from esodoc.schemas import ApiArgument, XmlElement


class RenderKind(Enum):
    SECTION = "section"
    ROOT = "root"
    COMPLEX_TYPE = "complex_type"
    BASE_TYPE = "base_type"
    SIMPLE_BASE_TYPE = "simple_base_type"
    SUB_TYPE = "sub_type"
    ENUM_TYPE = "enum_type"


@dataclass
class SectionComment:
    """Comment banner that introduces a group of definitions."""
    kind: ClassVar[RenderKind] = RenderKind.SECTION
    title: str


@dataclass
class RootType:
    """Root element: a named complex type plus the top level element."""
    kind: ClassVar[RenderKind] = RenderKind.ROOT
    element: XmlElement
    attributes: List[ApiArgument] = field(default_factory=list)


@dataclass
class ComplexType:
    """Ordinary complex type with a choice of children and attributes."""
    kind: ClassVar[RenderKind] = RenderKind.COMPLEX_TYPE
    element: XmlElement
    attributes: List[ApiArgument] = field(default_factory=list)


@dataclass
class BaseType:
    """Base type with children: element group, attribute type and placeholder."""
    kind: ClassVar[RenderKind] = RenderKind.BASE_TYPE
    element: XmlElement
    attributes: List[ApiArgument] = field(default_factory=list)


@dataclass
class SimpleBaseType:
    """Base type without children: string content plus attributes."""
    kind: ClassVar[RenderKind] = RenderKind.SIMPLE_BASE_TYPE
    element: XmlElement
    attributes: List[ApiArgument] = field(default_factory=list)


@dataclass
class SubType:
    """Extension of a base type."""
    kind: ClassVar[RenderKind] = RenderKind.SUB_TYPE
    element: XmlElement
    base_type: str
    group: Optional[str] = None
    attributes: List[ApiArgument] = field(default_factory=list)


@dataclass
class EnumType:
    """Union of an integer and a string enumeration for an attribute type."""
    kind: ClassVar[RenderKind] = RenderKind.ENUM_TYPE
    name: str
    values: List[str] = field(default_factory=list)


RenderInstruction = Union[
    SectionComment, RootType, ComplexType, BaseType, SimpleBaseType, SubType, EnumType
]


def group_name(base_type: str) -> str:
    """Name of the element group that lists the children of a base type."""
    return f"{base_type}TypeElements"


def attribute_type_name(base_type: str) -> str:
    """Name of the attribute-only complex type of a base type."""
    return f"{base_type}Type"
