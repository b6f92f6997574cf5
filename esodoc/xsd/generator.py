"""
XSD generator - orchestrates planning and rendering of the UI layout schema.

The schema is planned and rendered completely in memory; the output file is
only written once both steps succeeded.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from esodoc.errors import ConfigurationError
from esodoc.schemas import Documentation
from esodoc.xsd.config import XsdConfig, load_config
from esodoc.xsd.planner import SchemaPlan, SchemaPlanner
from esodoc.xsd.renderer import SchemaRenderer, xs

logger = logging.getLogger(__name__)

INDENT = "    "


class XsdGenerator:
    """
    Generate the UI XML layout schema for a parsed documentation.

    Usage:
        generator = XsdGenerator(documentation, load_config())
        path = generator.generate(Path("target"))
    """

    def __init__(self, documentation: Documentation, config: Optional[XsdConfig] = None):
        self.documentation = documentation
        self.config = config or load_config()

    def output_file_name(self) -> str:
        return f"esoui{self.documentation.api_version}.xsd"

    def plan(self) -> SchemaPlan:
        return SchemaPlanner(self.documentation, self.config).plan()

    def load_template(self) -> ET.ElementTree:
        """Parse the template document, keeping its comments."""
        template_file = Path(self.config.template_file)
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            return ET.parse(template_file, parser=parser)
        except (OSError, ET.ParseError) as e:
            raise ConfigurationError(f"Cannot read schema template {template_file}: {e}") from e

    def build(self) -> ET.ElementTree:
        """Plan and render the complete schema document."""
        plan = self.plan()

        tree = self.load_template()
        root = tree.getroot()
        schema = root if root.tag == xs("schema") else root.find(f".//{xs('schema')}")
        if schema is None:
            raise ConfigurationError(f"Schema template {self.config.template_file} has no xs:schema node")

        SchemaRenderer(self.config, plan.defined_elements).render(plan.instructions, schema)
        ET.indent(tree, space=INDENT)
        return tree

    def render(self) -> str:
        """Return the schema document as a string."""
        tree = self.build()
        return ET.tostring(tree.getroot(), encoding="unicode", xml_declaration=True)

    def generate(self, output_dir: Path) -> Path:
        """
        Write ``esoui<version>.xsd`` into ``output_dir``.

        Returns:
            Path to the written schema file
        """
        tree = self.build()

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        xsd_file = output_dir / self.output_file_name()

        logger.info(f"Writing XSD file: {xsd_file}")
        tree.write(xsd_file, encoding="UTF-8", xml_declaration=True)
        return xsd_file


def generate_xsd(
    documentation: Documentation,
    output_dir: Path,
    config: Optional[XsdConfig] = None,
) -> Path:
    """Convenience function to write the schema for ``documentation``."""
    return XsdGenerator(documentation, config).generate(output_dir)
