"""
Common utility functions for xml2py.
"""

# pylint: disable=line-too-long

import json
import os
import jinja2


def is_python_reserved_word(word: str) -> bool:
    """Checks if a word is a Python reserved word"""
    reserved_words = [
        'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
        'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
        'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
        'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return',
        'try', 'while', 'with', 'yield'
    ]
    return word in reserved_words


def py_ident(name: str) -> str:
    """
    Convert an XML element or attribute name into a Python type or field identifier.

    Only letters, decimal digits and underscores are kept, leading digits are
    removed, a run of leading underscores shrinks to one and the first
    remaining character is upper-cased. Names that end up as a keyword
    ('None', 'True', 'False') get a trailing underscore.

    Args:
        name (str): The raw XML name.

    Returns:
        str: The identifier, or an empty string if nothing usable remains.
    """
    val = ''.join(ch for ch in name if ch.isalpha() or ch.isdecimal() or ch == '_')
    while val and val[0].isdecimal():
        val = val[1:]
    if not val:
        return ''
    if val.startswith('__'):
        # class bodies mangle names with two leading underscores
        val = '_' + val.lstrip('_')
    val = val[0].upper() + val[1:]
    if is_python_reserved_word(val):
        val += '_'
    return val


def local_name(tag: str) -> str:
    """Strips the '{namespace}' prefix ElementTree puts on qualified names."""
    return tag.split('}')[-1] if '}' in tag else tag


def quote(value: str) -> str:
    """Renders a string as a double-quoted Python literal."""
    return json.dumps(value, ensure_ascii=False)


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package directory.

    Returns:
        str: The processed template as a string.
    """
    # Load the template environment
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
    template_env.filters['quote'] = quote

    # Load the template from the file
    template = template_env.get_template(file_path)

    # Render the template with the object as input
    output = template.render(**kvargs)

    return output
