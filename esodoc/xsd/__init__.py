"""UI XML layout schema (XSD) generation."""

from .config import XsdConfig, load_config
from .instructions import RenderKind, RenderInstruction
from .planner import SchemaPlan, SchemaPlanner, plan_schema
from .renderer import SchemaRenderer
from .generator import XsdGenerator, generate_xsd

__all__ = [
    "XsdConfig",
    "load_config",
    "RenderKind",
    "RenderInstruction",
    "SchemaPlan",
    "SchemaPlanner",
    "plan_schema",
    "SchemaRenderer",
    "XsdGenerator",
    "generate_xsd",
]
