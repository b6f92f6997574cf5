"""
esodoc - ESO API documentation converter.

Parses the Elder Scrolls Online API documentation page into a Documentation
model and generates:
- a UI XML layout schema (``esodoc.xsd``)
- Lua documentation stubs (``esodoc.stubs``)

Usage:
    from esodoc import parse_documentation, generate_xsd

    documentation = parse_documentation(Path("ESOUIDocumentation.txt"))
    generate_xsd(documentation, Path("target"))
"""

from .errors import ConfigurationError, DocumentationParseError, EsoDocError, MissingEntityError
from .schemas import (
    ApiArgument,
    ApiEvent,
    ApiFunction,
    ApiObject,
    ApiType,
    Documentation,
    FunctionAccess,
    XmlAttributeRef,
    XmlElement,
)
from .parser import DocumentationParser, parse_documentation
from .xsd import XsdConfig, XsdGenerator, generate_xsd, load_config
from .stubs import StubPackager, generate_stubs

__version__ = "0.1.0"

__all__ = [
    # Errors
    "EsoDocError",
    "DocumentationParseError",
    "MissingEntityError",
    "ConfigurationError",
    # Model
    "ApiType",
    "ApiArgument",
    "FunctionAccess",
    "ApiFunction",
    "ApiObject",
    "ApiEvent",
    "XmlAttributeRef",
    "XmlElement",
    "Documentation",
    # Parser
    "DocumentationParser",
    "parse_documentation",
    # Schema
    "XsdConfig",
    "XsdGenerator",
    "generate_xsd",
    "load_config",
    # Stubs
    "StubPackager",
    "generate_stubs",
]
