"""Merges schema trees that were inferred from separate sets of documents."""

import logging

from xml2py.schemanode import SchemaNode, copy_node

logger = logging.getLogger(__name__)


class SchemaMergeError(RuntimeError):
    """Raised when two nodes with different names are merged. This is a programming error."""

    def __init__(self, message: str, path: str = ''):
        self.message = message
        self.path = path
        super().__init__(f"{message} at {path}" if path else message)


def merge_nodes(a: SchemaNode, b: SchemaNode) -> SchemaNode:
    """
    Folds the facts of b into a.

    a is changed in place and returned; children that only occur in b are
    moved over to a. Use merge_trees() to leave both inputs untouched.

    Args:
        a (SchemaNode): The node to merge into.
        b (SchemaNode): The node to merge from. Must have the same name as a.

    Returns:
        SchemaNode: a, holding the union of both nodes.
    """
    if a.name != b.name:
        raise SchemaMergeError(f"developer error: cannot merge node '{b.name}' into node '{a.name}'", a.path())

    a.is_array = a.is_array or b.is_array
    a.has_character_data = a.has_character_data or b.has_character_data

    for attr in b.attributes:
        a.add_attribute(attr)

    for child_b in b.children:
        child_a = a.get_child(child_b.name)
        if child_a is None:
            a.set_child(child_b)
        else:
            a.set_child(merge_nodes(child_a, child_b))
    return a


def merge_trees(a: SchemaNode, b: SchemaNode) -> SchemaNode:
    """
    Merges two schema trees into a new one.

    Both inputs are copied before merging, so they stay valid. The top-level
    nodes of the result are detached from the returned root, as they are in
    a converter's own tree.

    Args:
        a (SchemaNode): The first tree root.
        b (SchemaNode): The second tree root.

    Returns:
        SchemaNode: The root of the merged tree.
    """
    root = merge_nodes(copy_node(a), copy_node(b))
    for child in root.children:
        child.parent = None
    logger.debug("Merged schema trees into %d top-level elements", len(root.children))
    return root
