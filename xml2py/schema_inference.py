"""Infers a schema tree from sample XML documents.

This module provides the ingestion logic used by:
- x2py: Generate Python data classes from XML files
- x2tree: Dump the inferred schema tree as JSON

A converter is not thread-safe. Ingestion into one converter from several
threads must be serialized by the caller.
"""

import json
import logging
import os
from collections import Counter
import xml.etree.ElementTree as ET
from typing import IO, List

from xml2py.common import local_name
from xml2py.schemamerge import merge_trees
from xml2py.schemanode import SchemaNode

logger = logging.getLogger(__name__)


class XmlDecodeError(ValueError):
    """Raised when a sample document is not well-formed XML."""

    def __init__(self, message: str, source: str = '<string>'):
        self.message = message
        self.source = source
        super().__init__(f"{message} in {source}")


def child_elements(element: ET.Element) -> List[ET.Element]:
    """Returns the child elements, leaving out comments and processing instructions."""
    return [child for child in element if isinstance(child.tag, str)]


def has_character_data(element: ET.Element) -> bool:
    """
    Checks whether an element has raw text content.

    The inner content of an element starts with its leading text. If that is
    blank, the content either is empty or begins with the markup of the
    first child, so only the leading text counts. Entity references and CDATA
    sections are already decoded into the text, so a leading '<' is data.
    """
    content = (element.text or '').strip()
    return len(content) > 0


def ingest_element(element: ET.Element, parent: SchemaNode) -> SchemaNode:
    """
    Folds an element and its descendants into the schema tree.

    Args:
        element (ET.Element): The decoded element.
        parent (SchemaNode): The schema node of the element's parent.

    Returns:
        SchemaNode: The schema node for the element.
    """
    name = local_name(element.tag)
    if parent.get_child(name) is None:
        logger.debug("New element %s/%s", parent.path(), name)
    child = parent.get_or_add_child(name)

    if not child.has_character_data:
        child.has_character_data = has_character_data(element)

    for attr_name, attr_value in element.attrib.items():
        if attr_value == '':
            continue
        child.add_attribute(local_name(attr_name))

    sub_elements = child_elements(element)
    counts = Counter(local_name(sub_element.tag) for sub_element in sub_elements)
    for sub_element in sub_elements:
        grand_child = ingest_element(sub_element, child)
        if not grand_child.is_array:
            grand_child.is_array = counts[grand_child.name] > 1

    return child


class XmlConverter:
    """Accumulates the structure of sample XML documents in one schema tree."""

    def __init__(self):
        self.root: SchemaNode = SchemaNode('')

    @property
    def all_nodes(self) -> List[SchemaNode]:
        """The top-level elements of all ingested documents."""
        return self.root.children

    def parse_xml_string(self, data: str | bytes, source: str = '<string>') -> SchemaNode:
        """
        Ingests one XML document.

        The document is decoded completely before the schema tree is touched,
        so a malformed document leaves the tree as it was.

        Args:
            data (str | bytes): The XML document.
            source (str): Name of the document for error messages.

        Returns:
            SchemaNode: The schema node of the document element.
        """
        try:
            element = ET.fromstring(data)
        except ET.ParseError as e:
            raise XmlDecodeError(str(e), source) from e
        node = ingest_element(element, self.root)
        node.parent = None
        return node

    def parse_xml_bytes(self, data: bytes, source: str = '<bytes>') -> SchemaNode:
        """Ingests one XML document given as bytes."""
        return self.parse_xml_string(data, source)

    def parse_xml_reader(self, stream: IO, source: str = '<stream>') -> SchemaNode:
        """Ingests one XML document read from a file-like object."""
        return self.parse_xml_string(stream.read(), source)

    def parse_xml_file(self, path: str) -> SchemaNode:
        """Ingests one XML document from a file."""
        with open(path, 'rb') as f:
            return self.parse_xml_reader(f, path)


def combine(a: XmlConverter, b: XmlConverter) -> XmlConverter:
    """
    Creates a converter holding the union of the schemas of two converters.

    Both converters stay usable afterwards.

    Args:
        a (XmlConverter): The first converter.
        b (XmlConverter): The second converter.

    Returns:
        XmlConverter: A new converter with the merged tree.
    """
    converter = XmlConverter()
    converter.root = merge_trees(a.root, b.root)
    return converter


def convert_xml_files(input_files: List[str], sample_size: int = 0) -> XmlConverter:
    """Ingests XML files into a new converter.

    Args:
        input_files: List of XML file paths to analyze
        sample_size: Maximum number of documents to sample (0 = all)

    Returns:
        The converter holding the inferred schema
    """
    if not input_files:
        raise ValueError("At least one input file is required")

    converter = XmlConverter()
    for count, file_path in enumerate(input_files):
        if sample_size > 0 and count >= sample_size:
            break
        converter.parse_xml_file(file_path)
    logger.info("Ingested %d documents, %d top-level elements",
                min(len(input_files), sample_size) if sample_size > 0 else len(input_files),
                len(converter.all_nodes))
    return converter


def convert_xml_to_tree(input_files: List[str], json_file_path: str, sample_size: int = 0) -> None:
    """Infers the schema tree of XML files and writes it as JSON.

    Args:
        input_files: List of XML file paths to analyze
        json_file_path: Output path for the JSON document
        sample_size: Maximum number of documents to sample (0 = all)
    """
    converter = convert_xml_files(input_files, sample_size)

    # Ensure output directory exists
    output_dir = os.path.dirname(json_file_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(json_file_path, 'w', encoding='utf-8') as f:
        json.dump([node.to_dict() for node in converter.all_nodes], f, indent=2)
