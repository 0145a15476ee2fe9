"""Converts an inferred XML schema tree to Python data classes"""

# pylint: disable=line-too-long

import ast
import logging
import os
from typing import IO, Dict, List, Set, Tuple

from xml2py.common import process_template, py_ident
from xml2py.schema_inference import XmlConverter, convert_xml_files
from xml2py.schemanode import SchemaNode, copy_node, same_structure, sort_node

logger = logging.getLogger(__name__)

# names that would shadow the imports of the generated module or the xsdata Meta class
RESERVED_TYPE_NAMES = ['List', 'Optional']
RESERVED_FIELD_NAMES = ['Meta', 'List', 'Optional']


class XmlToPythonError(Exception):
    """Exception raised when the schema tree cannot be turned into Python code."""

    def __init__(self, message: str, path: str = ''):
        self.message = message
        self.path = path
        super().__init__(f"{message} at {path}" if path else message)


class EmitContext:
    """State of one emission run: the emitted records and the record types already assigned."""

    def __init__(self):
        self.records: List[Dict] = []
        self.known_types: List[Tuple[SchemaNode, str]] = []
        self.type_names: Set[str] = set(RESERVED_TYPE_NAMES)

    def find_known_type(self, node: SchemaNode) -> str | None:
        """Returns the type of the first assigned node with the same shape."""
        for known_node, type_name in self.known_types:
            if same_structure(node, known_node):
                return type_name
        return None

    def unique_type_name(self, name: str) -> str:
        """Makes a record type name unique within the run."""
        while name in self.type_names:
            name += '_'
        self.type_names.add(name)
        return name


class XmlToPython:
    """Converts an inferred XML schema tree to Python data classes"""

    def __init__(self, sort_types: bool = True, module_header: bool = True) -> None:
        self.sort_types = sort_types
        self.module_header = module_header

    def generate_records(self, root: SchemaNode) -> List[Dict]:
        """
        Assigns the record types for a schema tree.

        Every top-level element gets a record, every child element gets one
        unless a record of the same shape was already assigned, in which case
        that record is reused.

        Args:
            root (SchemaNode): The synthetic root of the schema tree. It is not emitted itself.

        Returns:
            List[Dict]: The records, parents before their children.
        """
        if self.sort_types:
            root = copy_node(root)
            sort_node(root)
        context = EmitContext()
        for node in root.children:
            type_name = py_ident(node.name)
            if not type_name:
                raise XmlToPythonError(f"Element name '{node.name}' does not yield a Python identifier", node.path())
            self.generate_record(node, context.unique_type_name(type_name), True, context)
        logger.info("Generated %d record types", len(context.records))
        return context.records

    def generate_record(self, node: SchemaNode, type_name: str, is_root: bool, context: EmitContext) -> None:
        """Adds the record for a node to the context, followed by the records of its children"""
        used_names: Set[str] = set(RESERVED_FIELD_NAMES)

        def unique_field_name(name: str, path: str) -> str:
            field_name = py_ident(name)
            if not field_name:
                raise XmlToPythonError(f"Name '{name}' does not yield a Python identifier", path)
            while field_name in used_names:
                field_name += '_'
            used_names.add(field_name)
            return field_name

        fields = []
        if node.has_character_data:
            fields.append({
                'name': unique_field_name('Content', node.path()),
                'type': 'Optional[str]',
                'kind': 'Text',
                'xml_name': None,
                'is_array': False
            })

        # attribute values stay strings, converting them is up to the user
        for attr in node.attributes:
            fields.append({
                'name': unique_field_name(attr, f"{node.path()}/@{attr}"),
                'type': 'Optional[str]',
                'kind': 'Attribute',
                'xml_name': attr,
                'is_array': False
            })

        pending: List[Tuple[SchemaNode, str]] = []
        for child in node.children:
            field_name = unique_field_name(child.name, child.path())
            child_type = context.find_known_type(child)
            if child_type is not None:
                logger.debug("Reusing %s for %s", child_type, child.path())
            else:
                child_type = context.unique_type_name(type_name + '_' + py_ident(child.name))
                context.known_types.append((child, child_type))
                pending.append((child, child_type))
            fields.append({
                'name': field_name,
                'type': f"List[{child_type}]" if child.is_array else f"Optional[{child_type}]",
                'kind': 'Element',
                'xml_name': child.name,
                'is_array': child.is_array
            })

        context.records.append({
            'name': type_name,
            'xml_name': node.name,
            'is_root': is_root,
            'fields': fields
        })

        for child, child_type in pending:
            self.generate_record(child, child_type, False, context)

    def generate_code_string(self, root: SchemaNode) -> str:
        """Generates the Python module source for a schema tree"""
        parts = []
        if self.module_header:
            parts.append(process_template("xmltopython/module_header.jinja"))
        for record in self.generate_records(root):
            parts.append(process_template("xmltopython/dataclass_core.jinja", record=record))
        code = '\n\n'.join(parts)
        try:
            ast.parse(code)
        except SyntaxError as e:
            raise XmlToPythonError(f"developer error: generated code does not parse: {e}") from e
        return code

    def generate_code_bytes(self, root: SchemaNode) -> bytes:
        """Generates the Python module source for a schema tree as UTF-8 bytes"""
        return self.generate_code_string(root).encode('utf-8')

    def generate_code_writer(self, root: SchemaNode, stream: IO[str]) -> None:
        """Writes the Python module source for a schema tree to a text stream"""
        stream.write(self.generate_code_string(root))

    def generate_code_file(self, root: SchemaNode, py_file_path: str) -> None:
        """Writes the Python module source for a schema tree to a file"""
        code = self.generate_code_string(root)
        output_dir = os.path.dirname(py_file_path)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir, exist_ok=True)
        with open(py_file_path, 'w', encoding='utf-8') as file:
            file.write(code)


def convert_xml_to_python(input_files: List[str], py_file_path: str, sort_types: bool = True, module_header: bool = True, sample_size: int = 0) -> None:
    """Infers a schema from XML files and writes Python data classes for it"""
    converter = convert_xml_files(input_files, sample_size)
    XmlToPython(sort_types=sort_types, module_header=module_header).generate_code_file(converter.root, py_file_path)


def convert_xml_strings_to_python(xml_strings: List[str], sort_types: bool = True, module_header: bool = True) -> str:
    """Infers a schema from XML documents and returns Python data classes for it"""
    converter = XmlConverter()
    for xml_string in xml_strings:
        converter.parse_xml_string(xml_string)
    return XmlToPython(sort_types=sort_types, module_header=module_header).generate_code_string(converter.root)
