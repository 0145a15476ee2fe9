"""Schema tree model for XML structure inference.

A SchemaNode stands for one element name at one position in the element
hierarchy and accumulates the structural facts seen across all ingested
documents: whether the element repeats, whether it carries text, which
attributes it has and which child elements occur below it.
"""

import weakref
from typing import Any, Dict, List


class SchemaNode:
    """ An element name at a position in the hierarchy, with its accumulated facts. """

    def __init__(self, name: str, parent: 'SchemaNode | None' = None):
        self.name: str = name
        self.is_array: bool = False
        self.has_character_data: bool = False
        self.attributes: List[str] = []
        self._children: Dict[str, SchemaNode] = {}
        self._parent: weakref.ReferenceType | None = None
        self.parent = parent

    @property
    def parent(self) -> 'SchemaNode | None':
        """The owning node. The reference is weak, the parent owns the child and not the other way around."""
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value: 'SchemaNode | None'):
        self._parent = weakref.ref(value) if value is not None else None

    @property
    def children(self) -> List['SchemaNode']:
        """The child nodes in first-seen order."""
        return list(self._children.values())

    def get_child(self, name: str) -> 'SchemaNode | None':
        """Returns the child with the given name or None."""
        return self._children.get(name)

    def get_or_add_child(self, name: str) -> 'SchemaNode':
        """Returns the child with the given name, appending a new one if there is none."""
        child = self._children.get(name)
        if child is None:
            child = SchemaNode(name, self)
            self._children[name] = child
        return child

    def set_child(self, child: 'SchemaNode') -> None:
        """Puts a child in place of the existing one with the same name, or appends it, and re-parents it."""
        self._children[child.name] = child
        child.parent = self

    def sort_children(self) -> None:
        """Orders the children by name."""
        self._children = dict(sorted(self._children.items()))

    def contains_attribute(self, name: str) -> bool:
        """Checks whether the attribute has been recorded."""
        return name in self.attributes

    def add_attribute(self, name: str) -> None:
        """Records an attribute, keeping first-seen order."""
        if not self.contains_attribute(name):
            self.attributes.append(name)

    def path(self) -> str:
        """The slash separated element path from the top-level element down to this node."""
        names = []
        node: SchemaNode | None = self
        while node is not None and node.name:
            names.append(node.name)
            node = node.parent
        return '/'.join(reversed(names))

    def to_dict(self) -> Dict[str, Any]:
        """Returns the accumulated facts of this node and its subtree as plain data."""
        return {
            'name': self.name,
            'isArray': self.is_array,
            'hasCharacterData': self.has_character_data,
            'attributes': list(self.attributes),
            'children': [child.to_dict() for child in self._children.values()]
        }

    def __repr__(self) -> str:
        return f"SchemaNode({self.name!r}, attributes={self.attributes!r}, children={list(self._children)!r})"


def copy_node(node: SchemaNode) -> SchemaNode:
    """
    Deep copies a schema subtree.

    The copy of the top node is detached (its parent is None) since it is not
    part of the original parent's children.

    Args:
        node (SchemaNode): The subtree to copy.

    Returns:
        SchemaNode: The copy.
    """
    result = SchemaNode(node.name)
    result.is_array = node.is_array
    result.has_character_data = node.has_character_data
    result.attributes = list(node.attributes)
    for child in node.children:
        child_copy = copy_node(child)
        result.set_child(child_copy)
        if child.parent is None:
            # top-level nodes are detached from the synthetic root
            child_copy.parent = None
    return result


def sort_node(node: SchemaNode) -> None:
    """Sorts attributes and children of a subtree by name, in place. Use it on a copy."""
    node.attributes.sort()
    node.sort_children()
    for child in node.children:
        sort_node(child)


def same_structure(a: SchemaNode, b: SchemaNode) -> bool:
    """
    Checks whether two nodes would produce identical record bodies.

    The names of a and b themselves are not compared, so two differently
    named elements of the same shape share one generated type. The names and
    the repetition of their children are compared since they end up in the
    field declarations.

    Args:
        a (SchemaNode): The first node.
        b (SchemaNode): The second node.

    Returns:
        bool: True if both nodes have the same shape.
    """
    if a.has_character_data != b.has_character_data:
        return False
    if a.attributes != b.attributes:
        return False
    a_children = a.children
    b_children = b.children
    if len(a_children) != len(b_children):
        return False
    for child_a, child_b in zip(a_children, b_children):
        if child_a.name != child_b.name or child_a.is_array != child_b.is_array:
            return False
    for child_a, child_b in zip(a_children, b_children):
        if not same_structure(child_a, child_b):
            return False
    return True
