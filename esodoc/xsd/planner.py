"""
Schema planner.

Walks the XML layout of the parsed documentation and queues render
instructions in the order the schema needs them:

1. Root element (``GuiXml``)
2. Container elements, then other elements (configured order)
3. Base types: parents of the remaining elements, sorted by name
4. Sub-types grouped per base type
5. Basic types: remaining elements without a parent
6. Attribute types: enumerations used by any rendered attribute

Later steps skip anything an earlier step already defined, and the set of
used attribute types is only complete once every element step has run, which
is why attribute types come last.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from esodoc.errors import MissingEntityError
from esodoc.schemas import ApiArgument, Documentation, XmlElement
from esodoc.xsd.config import XsdConfig
from esodoc.xsd.instructions import (
    BaseType,
    ComplexType,
    EnumType,
    RenderInstruction,
    RootType,
    SectionComment,
    SimpleBaseType,
    SubType,
    group_name,
)

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "GuiXml"


@dataclass
class SchemaPlan:
    """Ordered render instructions plus the run state they were planned with."""
    instructions: List[RenderInstruction]
    defined_elements: Set[str]
    used_attribute_types: Set[str]


class SchemaPlanner:
    """
    Build the render instruction queue for one schema run.

    The defined-elements and used-attribute-types sets only ever grow and are
    created fresh for every call to ``plan``.
    """

    def __init__(self, documentation: Documentation, config: XsdConfig):
        self.documentation = documentation
        self.layout = documentation.xml_layout
        self.globals = documentation.globals
        self.config = config

        self.instructions: List[RenderInstruction] = []
        self.defined_elements: Set[str] = set()
        self.used_attribute_types: Set[str] = set()

    def plan(self) -> SchemaPlan:
        self.instructions = []
        self.defined_elements = set(self.config.ignored_elements)
        self.used_attribute_types = set()

        self._plan_root()

        self._start_section("container elements")
        self._plan_listed_elements(self.config.containers)

        self._start_section("other elements")
        self._plan_listed_elements(self.config.others)

        base_types, sub_types, basic_types = self.find_remaining_element_types()

        self._start_section("element basetypes")
        grouped_bases = self._plan_base_types(base_types)

        self._start_section("element types")
        for base_type in base_types:
            self._start_section(f"{base_type} element types")
            self._plan_sub_types(base_type, sub_types[base_type], base_type in grouped_bases)

        self._start_section("basic element types")
        for element in basic_types:
            if element.name not in self.defined_elements:
                self._add(ComplexType(element, self._attributes(element)))
                self._set_defined(element)

        self._start_section("basic attribute types")
        self._plan_attribute_types()

        logger.info(
            f"Planned {len(self.instructions)} schema instructions, "
            f"{len(self.defined_elements)} defined elements, "
            f"{len(self.used_attribute_types)} attribute types"
        )
        return SchemaPlan(
            instructions=self.instructions,
            defined_elements=self.defined_elements,
            used_attribute_types=self.used_attribute_types,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _plan_root(self) -> None:
        root = self.layout.get(ROOT_ELEMENT)
        if root is None:
            raise MissingEntityError("root element", ROOT_ELEMENT)

        self._start_section("root element")
        self._add(RootType(root, self._attributes(root)))
        self._set_defined(root)

    def _plan_listed_elements(self, names: List[str]) -> None:
        for name in names:
            element = self.layout.get(name)
            if element is None or name in self.defined_elements:
                continue
            self._add(ComplexType(element, self._attributes(element)))
            self._set_defined(element)

    def find_remaining_element_types(
        self,
    ) -> Tuple[List[str], Dict[str, List[XmlElement]], List[XmlElement]]:
        """
        Partition the elements that are not defined yet.

        Returns:
            Tuple of (sorted base type names, base type -> sub-type elements,
            parentless elements)
        """
        sub_types: Dict[str, List[XmlElement]] = {}
        basic_types: List[XmlElement] = []

        for name, element in self.layout.items():
            if name in self.defined_elements:
                continue
            if element.parent is not None:
                sub_types.setdefault(element.parent.type, []).append(element)
            else:
                basic_types.append(element)

        return sorted(sub_types), sub_types, basic_types

    def _plan_base_types(self, base_types: List[str]) -> Set[str]:
        grouped = set()
        for name in base_types:
            element = self.layout.get(name)
            if element is None or name in self.defined_elements:
                continue
            if element.children:
                self._add(BaseType(element, self._attributes(element)))
                grouped.add(name)
            else:
                self._add(SimpleBaseType(element, self._attributes(element)))
            self._set_defined(element)
        return grouped

    def _plan_sub_types(self, base_type: str, elements: List[XmlElement], grouped: bool) -> None:
        group = group_name(base_type) if grouped else None
        for element in elements:
            if element.name in self.defined_elements:
                continue
            self._add(SubType(element, base_type, group, self._attributes(element)))
            self._set_defined(element)

    def _plan_attribute_types(self) -> None:
        for name in sorted(self.used_attribute_types):
            values = self.globals.get(name)
            if values is None:
                continue
            self._add(EnumType(name, list(values)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _start_section(self, title: str) -> None:
        self._add(SectionComment(title))

    def _add(self, instruction: RenderInstruction) -> None:
        self.instructions.append(instruction)

    def _attributes(self, element: XmlElement) -> List[ApiArgument]:
        attributes = self.documentation.element_attributes(element)
        self.used_attribute_types.update(attribute.type.type for attribute in attributes)
        return attributes

    def _set_defined(self, element: XmlElement) -> None:
        self.defined_elements.add(element.name)


def plan_schema(documentation: Documentation, config: XsdConfig) -> SchemaPlan:
    """Convenience function to plan a schema run."""
    return SchemaPlanner(documentation, config).plan()
