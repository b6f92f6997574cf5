"""
Schema renderer.

Materializes the planned render instructions into ``xs:`` nodes under the
template's schema root. Renames from the configuration are applied here.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Dict, Iterable, List, Optional, Set

from esodoc.schemas import ApiArgument, ApiType
from esodoc.xsd.config import XsdConfig
from esodoc.xsd.instructions import (
    BaseType,
    ComplexType,
    EnumType,
    RenderInstruction,
    RenderKind,
    RootType,
    SectionComment,
    SimpleBaseType,
    SubType,
    attribute_type_name,
    group_name,
)

logger = logging.getLogger(__name__)

XS_NAMESPACE = "http://www.w3.org/2001/XMLSchema"
ET.register_namespace("xs", XS_NAMESPACE)


def xs(tag: str) -> str:
    """Qualified tag name in the XML Schema namespace."""
    return f"{{{XS_NAMESPACE}}}{tag}"


def unbounded_choice() -> ET.Element:
    return ET.Element(xs("choice"), minOccurs="0", maxOccurs="unbounded")


class SchemaRenderer:
    """
    Turn render instructions into schema nodes.

    ``defined_elements`` is the final set of element names defined by the
    planner; sub-types leave those out of their own child choice.
    """

    def __init__(self, config: XsdConfig, defined_elements: Set[str]):
        self.config = config
        self.defined_elements = defined_elements
        self._factories: Dict[RenderKind, Callable[..., List[ET.Element]]] = {
            RenderKind.SECTION: self._render_section,
            RenderKind.ROOT: self._render_root,
            RenderKind.COMPLEX_TYPE: self._render_complex_type,
            RenderKind.BASE_TYPE: self._render_base_type,
            RenderKind.SIMPLE_BASE_TYPE: self._render_simple_base_type,
            RenderKind.SUB_TYPE: self._render_sub_type,
            RenderKind.ENUM_TYPE: self._render_enum_type,
        }

    def render(self, instructions: Iterable[RenderInstruction], schema: ET.Element) -> ET.Element:
        """Append the nodes of every instruction to ``schema`` in order."""
        count = 0
        for instruction in instructions:
            for node in self.render_instruction(instruction):
                schema.append(node)
                count += 1
        logger.info(f"Rendered {count} schema nodes")
        return schema

    def render_instruction(self, instruction: RenderInstruction) -> List[ET.Element]:
        return self._factories[instruction.kind](instruction)

    # ------------------------------------------------------------------
    # Instruction factories
    # ------------------------------------------------------------------

    def _render_section(self, instruction: SectionComment) -> List[ET.Element]:
        return [ET.Comment(f" {instruction.title} ")]

    def _render_root(self, instruction: RootType) -> List[ET.Element]:
        element = instruction.element
        type_name = f"{element.name}Type"
        return [
            self.complex_type(type_name, element.children, instruction.attributes),
            self.element(element.name, type_name),
        ]

    def _render_complex_type(self, instruction: ComplexType) -> List[ET.Element]:
        element = instruction.element
        return [self.complex_type(element.name, element.children, instruction.attributes)]

    def _render_base_type(self, instruction: BaseType) -> List[ET.Element]:
        name = instruction.element.name
        return [
            self.element_group(group_name(name), instruction.element.children),
            self.complex_type(attribute_type_name(name), [], instruction.attributes),
            self.extension_type(name, attribute_type_name(name), group=group_name(name)),
        ]

    def _render_simple_base_type(self, instruction: SimpleBaseType) -> List[ET.Element]:
        extension = ET.Element(xs("extension"), base="xs:string")
        self.append_attributes(extension, instruction.attributes)

        content = ET.Element(xs("simpleContent"))
        content.append(extension)

        type_element = ET.Element(xs("complexType"), name=instruction.element.name)
        type_element.append(content)
        return [type_element]

    def _render_sub_type(self, instruction: SubType) -> List[ET.Element]:
        element = instruction.element
        return [
            self.extension_type(
                element.name,
                self.sub_type_base(instruction),
                group=instruction.group,
                children=element.children,
                attributes=instruction.attributes,
                documentation=element.documentation,
            )
        ]

    def _render_enum_type(self, instruction: EnumType) -> List[ET.Element]:
        type_element = ET.Element(xs("simpleType"), name=self.config.attribute_type(instruction.name))
        union = ET.SubElement(type_element, xs("union"))

        integer_type = ET.SubElement(union, xs("simpleType"))
        ET.SubElement(integer_type, xs("restriction"), base="xs:integer")

        enum_type = ET.SubElement(union, xs("simpleType"))
        restriction = ET.SubElement(enum_type, xs("restriction"), base="xs:string")
        for value in instruction.values:
            ET.SubElement(
                restriction,
                xs("enumeration"),
                value=self.config.strip_enum_prefix(instruction.name, value),
            )
        return [type_element]

    # ------------------------------------------------------------------
    # Node builders
    # ------------------------------------------------------------------

    def sub_type_base(self, instruction: SubType) -> str:
        """
        Extension base of a sub-type.

        A grouped base type already carries its element group, so its
        sub-types extend the attribute-only ``<Base>Type`` and add the group
        themselves. A configured parent type rename always wins.
        """
        base_type = instruction.base_type
        if base_type in self.config.parent_type_rename:
            return self.config.parent_type(base_type)
        if instruction.group:
            return attribute_type_name(base_type)
        return base_type

    def element(self, name: str, type_name: str) -> ET.Element:
        return ET.Element(xs("element"), name=self.config.element_name(name), type=type_name)

    def append_attributes(self, parent: ET.Element, attributes: List[ApiArgument]) -> None:
        for attribute in attributes:
            ET.SubElement(
                parent,
                xs("attribute"),
                name=attribute.name,
                type=self.config.attribute_type(attribute.type.type),
            )

    def complex_type(
        self,
        name: str,
        children: List[ApiType],
        attributes: List[ApiArgument],
    ) -> ET.Element:
        type_element = ET.Element(xs("complexType"), name=name)

        choice = unbounded_choice()
        for child in children:
            if child.name not in self.config.ignored_child_elements:
                choice.append(self.element(child.name, child.type))
        if len(choice):
            type_element.append(choice)

        self.append_attributes(type_element, attributes)
        return type_element

    def element_group(self, name: str, children: List[ApiType]) -> ET.Element:
        group = ET.Element(xs("group"), name=name)
        choice = ET.SubElement(group, xs("choice"))
        for child in children:
            choice.append(self.element(child.name, child.type))
        return group

    def extension_type(
        self,
        name: str,
        base: str,
        group: Optional[str] = None,
        children: Optional[List[ApiType]] = None,
        attributes: Optional[List[ApiArgument]] = None,
        documentation: Optional[str] = None,
    ) -> ET.Element:
        """
        Complex type extending ``base``.

        With documentation text the type is a leaf: simple content carrying
        an annotation and attributes only. Otherwise the extension holds a
        choice of the base type's group and any own children that are not
        defined elsewhere in the schema.
        """
        type_element = ET.Element(xs("complexType"), name=name)
        extension = ET.Element(xs("extension"), base=base)

        if documentation:
            annotation = ET.SubElement(type_element, xs("annotation"))
            ET.SubElement(annotation, xs("documentation")).text = documentation
        else:
            choice = unbounded_choice()
            if group:
                ET.SubElement(choice, xs("group"), ref=group)
            for child in children or []:
                if child.name not in self.defined_elements:
                    choice.append(self.element(child.name, child.type))
            if len(choice):
                extension.append(choice)

        self.append_attributes(extension, attributes or [])

        content = ET.SubElement(
            type_element, xs("simpleContent") if documentation else xs("complexContent")
        )
        content.append(extension)
        return type_element
