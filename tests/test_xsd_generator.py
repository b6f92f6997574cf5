import xml.etree.ElementTree as ET

import pytest
from lxml import etree

from esodoc.errors import ConfigurationError, MissingEntityError
from esodoc.schemas import ApiType, Documentation, XmlElement
from esodoc.xsd import SchemaRenderer, XsdConfig, XsdGenerator, generate_xsd, load_config
from esodoc.xsd.instructions import EnumType, SubType
from esodoc.xsd.renderer import xs


def top_level(schema, tag):
    return [node for node in schema if node.tag == xs(tag)]


def names(nodes):
    return [node.get("name") for node in nodes]


@pytest.fixture
def schema(documentation, xsd_config):
    return XsdGenerator(documentation, xsd_config).build().getroot()


def test_enumeration_strips_prefix_and_allows_integers():
    renderer = SchemaRenderer(XsdConfig(enum_prefixes={"Align": "ALIGN_"}), set())

    (node,) = renderer.render_instruction(EnumType("Align", ["ALIGN_LEFT", "ALIGN_RIGHT"]))

    union = node.find(xs("union"))
    integer_type, string_type = union.findall(xs("simpleType"))
    assert integer_type.find(xs("restriction")).get("base") == "xs:integer"
    assert list(integer_type.find(xs("restriction"))) == []

    restriction = string_type.find(xs("restriction"))
    assert restriction.get("base") == "xs:string"
    assert [e.get("value") for e in restriction.findall(xs("enumeration"))] == ["LEFT", "RIGHT"]


def test_enumeration_keeps_values_without_prefix():
    renderer = SchemaRenderer(XsdConfig(enum_prefixes={"Align": "ALIGN_"}), set())

    (node,) = renderer.render_instruction(EnumType("Align", ["ALIGN_LEFT", "CENTER"]))

    values = [e.get("value") for e in node.iter(xs("enumeration"))]
    assert values == ["LEFT", "CENTER"]


def test_schema_defines_each_type_once(schema):
    complex_names = names(top_level(schema, "complexType"))

    assert len(complex_names) == len(set(complex_names))
    assert complex_names == [
        "GuiXmlType",
        "Controls",
        "Font",
        "Anchor",
        "ControlType",
        "Control",
        "ScriptBase",
        "Label",
        "Texture",
        "OnShow",
    ]
    assert names(top_level(schema, "element")) == ["GuiXml"]
    assert names(top_level(schema, "group")) == ["ControlTypeElements"]
    assert names(top_level(schema, "simpleType")) == ["Align"]


def test_section_comments_in_order(schema):
    comments = [node.text.strip() for node in schema if node.tag is ET.Comment]
    assert comments == [
        "root element",
        "container elements",
        "other elements",
        "element basetypes",
        "element types",
        "Control element types",
        "ScriptBase element types",
        "basic element types",
        "basic attribute types",
    ]


def test_attribute_types_are_renamed(schema):
    font = next(node for node in top_level(schema, "complexType") if node.get("name") == "Font")
    attributes = font.findall(xs("attribute"))
    assert [(a.get("name"), a.get("type")) for a in attributes] == [("name", "xs:string"), ("font", "xs:string")]


def test_base_type_is_split_into_group_and_extension(schema):
    group = top_level(schema, "group")[0]
    assert [e.get("name") for e in group.iter(xs("element"))] == ["Anchor", "Controls"]

    control = next(node for node in top_level(schema, "complexType") if node.get("name") == "Control")
    extension = control.find(f"{xs('complexContent')}/{xs('extension')}")
    assert extension.get("base") == "ControlType"
    assert extension.find(f"{xs('choice')}/{xs('group')}").get("ref") == "ControlTypeElements"


def test_sub_type_leaves_out_defined_children(schema):
    label = next(node for node in top_level(schema, "complexType") if node.get("name") == "Label")
    extension = label.find(f"{xs('complexContent')}/{xs('extension')}")

    assert extension.get("base") == "ControlType"
    choice = extension.find(xs("choice"))
    assert [g.get("ref") for g in choice.findall(xs("group"))] == ["ControlTypeElements"]
    # Anchor is defined elsewhere in the schema
    assert choice.findall(xs("element")) == []
    assert [a.get("type") for a in extension.findall(xs("attribute"))] == ["Align"]


def test_sub_type_with_documentation_is_simple_content(schema):
    on_show = next(node for node in top_level(schema, "complexType") if node.get("name") == "OnShow")

    assert on_show.find(f"{xs('annotation')}/{xs('documentation')}").text == "self, hidden"
    assert on_show.find(f"{xs('simpleContent')}/{xs('extension')}").get("base") == "ScriptBase"


def compile_schema(documentation, config, tmp_path):
    xsd_file = generate_xsd(documentation, tmp_path, config)
    return etree.XMLSchema(etree.parse(str(xsd_file)))


def test_schema_compiles(documentation, xsd_config, tmp_path):
    schema = compile_schema(documentation, xsd_config, tmp_path)

    layout = etree.fromstring(
        "<GuiXml><Controls>"
        '<Label hidden="true" horizontalAlignment="LEFT"><Anchor point="RIGHT" offsetX="4"/></Label>'
        '<Control><Controls><Label horizontalAlignment="2"/></Controls></Control>'
        "</Controls></GuiXml>"
    )
    assert schema.validate(layout), schema.error_log

    wrong_alignment = etree.fromstring('<GuiXml><Controls><Label horizontalAlignment="MIDDLE"/></Controls></GuiXml>')
    assert not schema.validate(wrong_alignment)


def test_schema_compiles_with_bundled_config(documentation, tmp_path):
    schema = compile_schema(documentation, load_config(), tmp_path)

    layout = etree.fromstring('<GuiXml><Controls><Texture alpha="0.5"><Anchor/></Texture></Controls></GuiXml>')
    assert schema.validate(layout), schema.error_log


def test_parent_type_rename_overrides_sub_type_base(documentation, xsd_config, tmp_path):
    xsd_config.parent_type_rename = {"Control": "ControlType"}
    schema = XsdGenerator(documentation, xsd_config).build().getroot()

    label = next(node for node in top_level(schema, "complexType") if node.get("name") == "Label")
    assert label.find(f"{xs('complexContent')}/{xs('extension')}").get("base") == "ControlType"
    compile_schema(documentation, xsd_config, tmp_path)


def test_sub_type_keeps_undefined_children():
    renderer = SchemaRenderer(XsdConfig(), {"Anchor"})
    element = XmlElement(
        name="Button",
        children=[ApiType(name="Anchor", type="Anchor"), ApiType(name="Textures", type="ButtonTextures")],
    )

    (node,) = renderer.render_instruction(SubType(element, "Control", "ControlTypeElements"))

    elements = node.findall(f".//{xs('element')}")
    assert [(e.get("name"), e.get("type")) for e in elements] == [("Textures", "ButtonTextures")]


def test_renames_are_applied(documentation, xsd_config):
    xsd_config.element_name_rename = {"GuiXml": "GuiXmlRoot"}
    xsd_config.parent_type_rename = {"Control": "ControlBase"}
    schema = XsdGenerator(documentation, xsd_config).build().getroot()

    assert names(top_level(schema, "element")) == ["GuiXmlRoot"]
    label = next(node for node in top_level(schema, "complexType") if node.get("name") == "Label")
    assert label.find(f"{xs('complexContent')}/{xs('extension')}").get("base") == "ControlBase"


def test_ignored_child_elements_are_left_out(documentation, xsd_config):
    xsd_config.ignored_child_elements = {"Font"}
    schema = XsdGenerator(documentation, xsd_config).build().getroot()

    root_type = next(node for node in top_level(schema, "complexType") if node.get("name") == "GuiXmlType")
    assert [e.get("name") for e in root_type.iter(xs("element"))] == ["Controls"]


def test_generate_writes_versioned_file(documentation, xsd_config, tmp_path):
    xsd_file = generate_xsd(documentation, tmp_path / "out", xsd_config)

    assert xsd_file == tmp_path / "out" / "esoui101.xsd"
    content = xsd_file.read_text(encoding="utf-8")
    assert content.startswith("<?xml")
    assert 'xmlns:xs="http://www.w3.org/2001/XMLSchema"' in content
    assert "<xs:simpleType name=\"Align\">" in content
    assert ET.parse(xsd_file).getroot().get("elementFormDefault") == "qualified"


def test_render_returns_document(documentation, xsd_config):
    content = XsdGenerator(documentation, xsd_config).render()
    assert "<!-- root element -->" in content
    assert "xs:schema" in content


def test_failed_generation_writes_nothing(tmp_path):
    documentation = Documentation(api_version=100)
    documentation.get_or_create_element("GuiXml").add_shared_attribute("tier")

    with pytest.raises(MissingEntityError):
        XsdGenerator(documentation, XsdConfig()).generate(tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_missing_template_raises(documentation, xsd_config, tmp_path):
    xsd_config.template_file = tmp_path / "missing.xsd"
    with pytest.raises(ConfigurationError):
        XsdGenerator(documentation, xsd_config).build()


def test_template_without_schema_raises(documentation, xsd_config, tmp_path):
    template = tmp_path / "template.xsd"
    template.write_text("<root/>", encoding="utf-8")
    xsd_config.template_file = template

    with pytest.raises(ConfigurationError):
        XsdGenerator(documentation, xsd_config).build()
