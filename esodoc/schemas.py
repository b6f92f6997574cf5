"""
Pydantic schemas for the parsed API documentation.

The documentation model is populated exclusively by the parser and then handed
read-only to the schema engine and the Lua stub generator.

Architecture:
- ApiType / ApiArgument: (display name, canonical type) pairs used everywhere
- ApiFunction: global or object-owned function with args and returns
- ApiObject: scripting object with its own function table and inheritance links
- ApiEvent: event name with its callback payload
- XmlAttributeRef / XmlElement: UI XML layout grammar
- Documentation: root record holding all name-keyed maps

Cross references between objects and XML elements are stored by name and
resolved through the Documentation at access time, so entities can be
referenced before they are defined.
"""

import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from esodoc.errors import MissingEntityError

LINK_PATTERN = re.compile(r"\[(.+)\|#(.+)\]")


# ============================================================================
# TYPES AND ARGUMENTS
# ============================================================================

class ApiType(BaseModel):
    """Type reference: a display name and the canonical type it points to."""
    name: str = Field(description="Display name")
    type: str = Field(description="Canonical type name")

    @classmethod
    def from_token(cls, token: str, type: Optional[str] = None) -> "ApiType":
        """
        Resolve a raw type token.

        A token like ``[Bar|#Baz]`` is decomposed into name ``Bar`` and type
        ``Baz``. Anything else (including a link token that fails to
        decompose) resolves to itself, unless the caller supplies the type.
        """
        if token.startswith("["):
            match = LINK_PATTERN.match(token)
            if match:
                return cls(name=match.group(1), type=match.group(2))
            return cls(name=token, type=token)
        return cls(name=token, type=type or token)


class ApiArgument(BaseModel):
    """Named, typed argument (parameter, return value, attribute, payload)."""
    name: str = Field(description="Argument name")
    type: ApiType = Field(description="Argument type")


# ============================================================================
# FUNCTIONS, OBJECTS, EVENTS
# ============================================================================

class FunctionAccess(str, Enum):
    """Access level of a documented function."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PROTECTED_ATTRIBUTES = "protected-attributes"
    PRIVATE = "private"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "FunctionAccess":
        """Look up an access level by its text, defaulting to public."""
        for access in cls:
            if access.value == value:
                return access
        return cls.PUBLIC


class ApiFunction(BaseModel):
    """A function of the global API or of a single object."""
    name: str = Field(description="Function name, unique within its container")
    access: FunctionAccess = Field(default=FunctionAccess.PUBLIC, description="Access level")
    args: Optional[List[ApiArgument]] = Field(None, description="Ordered parameters")
    returns: Optional[List[ApiArgument]] = Field(None, description="Ordered return values")
    has_variable_returns: bool = Field(default=False, description="Uses variable/additional returns")

    def add_argument(self, name: str, type: str = "") -> None:
        if self.args is None:
            self.args = []
        self.args.append(ApiArgument(name=name, type=ApiType.from_token(type)))

    def add_return(self, name: str, type: str = "") -> None:
        if self.returns is None:
            self.returns = []
        self.returns.append(ApiArgument(name=name, type=ApiType.from_token(type)))


class ApiObject(BaseModel):
    """
    Scripting object of the object API.

    ``parent`` and ``children`` hold object names; use
    ``Documentation.parent_of`` / ``Documentation.children_of`` to resolve them.
    """
    name: str = Field(description="Globally unique object name")
    functions: Dict[str, ApiFunction] = Field(default_factory=dict, description="Function table")
    parent: Optional[str] = Field(None, description="Name of the parent object")
    children: List[str] = Field(default_factory=list, description="Names of child objects")

    def add_function(self, function: ApiFunction) -> None:
        self.functions[function.name] = function


class ApiEvent(BaseModel):
    """Event with its callback payload."""
    name: str = Field(description="Globally unique event name")
    args: Optional[List[ApiArgument]] = Field(None, description="Ordered payload arguments")


# ============================================================================
# UI XML LAYOUT
# ============================================================================

class XmlAttributeRef(BaseModel):
    """
    Attribute of an XML element.

    Either declared inline (``argument`` is set) or a reference by name to a
    shared definition of the attributes section.
    """
    name: str = Field(description="Attribute name")
    argument: Optional[ApiArgument] = Field(None, description="Inline declaration, None when shared")

    @property
    def is_shared(self) -> bool:
        return self.argument is None


class XmlElement(BaseModel):
    """
    Element of the UI XML layout grammar.

    An element with ``documentation`` text is a leaf with simple content.
    """
    name: str = Field(description="Globally unique element name")
    attributes: List[XmlAttributeRef] = Field(default_factory=list, description="Ordered attributes")
    parent: Optional[ApiType] = Field(None, description="Inherited element type")
    children: List[ApiType] = Field(default_factory=list, description="Allowed child elements")
    documentation: Optional[str] = Field(None, description="Script argument documentation")

    def add_attribute(self, argument: ApiArgument) -> None:
        self.attributes.append(XmlAttributeRef(name=argument.name, argument=argument))

    def add_shared_attribute(self, name: str) -> None:
        self.attributes.append(XmlAttributeRef(name=name))


# ============================================================================
# DOCUMENTATION ROOT
# ============================================================================

class Documentation(BaseModel):
    """Complete parsed documentation for one API version."""
    api_version: int = Field(default=0, description="API version from the page title")
    globals: Dict[str, List[str]] = Field(default_factory=dict, description="Enumeration name -> values")
    functions: Dict[str, ApiFunction] = Field(default_factory=dict, description="Global functions")
    objects: Dict[str, ApiObject] = Field(default_factory=dict, description="Object API")
    events: Dict[str, ApiEvent] = Field(default_factory=dict, description="Events")
    xml_attributes: Dict[str, ApiArgument] = Field(default_factory=dict, description="Shared XML attributes")
    xml_layout: Dict[str, XmlElement] = Field(default_factory=dict, description="XML elements")

    def get_or_create_global(self, name: str) -> List[str]:
        return self.globals.setdefault(name, [])

    def get_or_create_object(self, name: str) -> ApiObject:
        if name not in self.objects:
            self.objects[name] = ApiObject(name=name)
        return self.objects[name]

    def get_or_create_element(self, name: str) -> XmlElement:
        if name not in self.xml_layout:
            self.xml_layout[name] = XmlElement(name=name)
        return self.xml_layout[name]

    def parent_of(self, obj: ApiObject) -> Optional[ApiObject]:
        if obj.parent is None:
            return None
        return self.objects.get(obj.parent)

    def children_of(self, obj: ApiObject) -> List[ApiObject]:
        return [self.objects[name] for name in obj.children if name in self.objects]

    def resolve_attribute(self, ref: XmlAttributeRef) -> ApiArgument:
        """Resolve an attribute reference to its declaration."""
        if ref.argument is not None:
            return ref.argument
        try:
            return self.xml_attributes[ref.name]
        except KeyError:
            raise MissingEntityError("shared XML attribute", ref.name) from None

    def element_attributes(self, element: XmlElement) -> List[ApiArgument]:
        return [self.resolve_attribute(ref) for ref in element.attributes]
