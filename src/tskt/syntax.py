from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

import tree_sitter as ts

T = TypeVar("T")
R = TypeVar("R")


class SyntaxKind(str, Enum):
    ANY_KEYWORD = "any_keyword"
    NUMBER_KEYWORD = "number_keyword"
    STRING_KEYWORD = "string_keyword"
    BOOLEAN_KEYWORD = "boolean_keyword"
    VOID_KEYWORD = "void_keyword"
    ARRAY_TYPE = "array_type"
    GENERIC_TYPE = "generic_type"
    FUNCTION_TYPE = "function_type"
    OBJECT_TYPE = "object_type"
    TYPE_ANNOTATION = "type_annotation"
    TYPE_PREDICATE = "type_predicate"
    ASSERTS = "asserts"
    PARAMETER = "parameter"
    REST_PATTERN = "rest_pattern"
    ACCESSIBILITY_MODIFIER = "accessibility_modifier"
    TYPE_PARAMETER = "type_parameter"
    VARIABLE_DECLARATOR = "variable_declarator"
    IDENTIFIER = "identifier"
    STRING = "string"
    OTHER = "other"


# `predefined_type` nodes carry the keyword as their text
_PREDEFINED_KINDS = {
    "any": SyntaxKind.ANY_KEYWORD,
    "number": SyntaxKind.NUMBER_KEYWORD,
    "string": SyntaxKind.STRING_KEYWORD,
    "boolean": SyntaxKind.BOOLEAN_KEYWORD,
    "void": SyntaxKind.VOID_KEYWORD,
}

_NODE_KINDS = {
    "array_type": SyntaxKind.ARRAY_TYPE,
    "generic_type": SyntaxKind.GENERIC_TYPE,
    "function_type": SyntaxKind.FUNCTION_TYPE,
    "object_type": SyntaxKind.OBJECT_TYPE,
    "type_annotation": SyntaxKind.TYPE_ANNOTATION,
    # `: x is T` and `: asserts x` wrap their payload the same way
    "type_predicate_annotation": SyntaxKind.TYPE_ANNOTATION,
    "asserts_annotation": SyntaxKind.TYPE_ANNOTATION,
    "type_predicate": SyntaxKind.TYPE_PREDICATE,
    "asserts": SyntaxKind.ASSERTS,
    "required_parameter": SyntaxKind.PARAMETER,
    "optional_parameter": SyntaxKind.PARAMETER,
    "rest_pattern": SyntaxKind.REST_PATTERN,
    "rest_parameter": SyntaxKind.REST_PATTERN,
    "accessibility_modifier": SyntaxKind.ACCESSIBILITY_MODIFIER,
    "type_parameter": SyntaxKind.TYPE_PARAMETER,
    "variable_declarator": SyntaxKind.VARIABLE_DECLARATOR,
    "identifier": SyntaxKind.IDENTIFIER,
    "type_identifier": SyntaxKind.IDENTIFIER,
    "property_identifier": SyntaxKind.IDENTIFIER,
    "shorthand_property_identifier_pattern": SyntaxKind.IDENTIFIER,
    "string": SyntaxKind.STRING,
}

SEPARATOR = ","
_TRIVIA = ("comment",)


def get_node_text(node: Optional[ts.Node]) -> str:
    """
    Get text of the tree sitter node
    """
    if not node or not node.text:
        return ""

    return node.text.decode("utf-8")


def kind_of(node: ts.Node) -> SyntaxKind:
    if node.type == "predefined_type":
        return _PREDEFINED_KINDS.get(get_node_text(node).strip(), SyntaxKind.OTHER)
    return _NODE_KINDS.get(node.type, SyntaxKind.OTHER)


class SyntaxNode:
    """
    Immutable view over a tree-sitter node: a closed ``kind`` tag, the raw
    grammar ``type``, text accessors and the two child list shapes.
    """

    __slots__ = ("_node", "kind")

    def __init__(self, node: ts.Node) -> None:
        self._node = node
        self.kind = kind_of(node)

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.value}, {self.type!r}, {self.text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self._node == other._node

    def __hash__(self) -> int:
        return hash((self._node.start_byte, self._node.end_byte, self._node.type))

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def is_token(self) -> bool:
        return self._node.child_count == 0

    @property
    def text(self) -> str:
        return get_node_text(self._node)

    @property
    def full_text(self) -> str:
        # tree-sitter spans exclude surrounding trivia, so this equals the
        # source slice of the node
        return get_node_text(self._node)

    @property
    def line(self) -> int:
        return self._node.start_point[0] + 1

    def field(self, name: str) -> Optional["SyntaxNode"]:
        child = self._node.child_by_field_name(name)
        return SyntaxNode(child) if child is not None else None

    def first_named(self) -> Optional["SyntaxNode"]:
        for child in self._node.named_children:
            if child.type not in _TRIVIA:
                return SyntaxNode(child)
        return None

    def children(self) -> "SyntaxList":
        return SyntaxList(
            [SyntaxNode(c) for c in self._node.children if c.type not in _TRIVIA]
        )

    def named_children(self) -> "SyntaxList":
        return SyntaxList(
            [SyntaxNode(c) for c in self._node.named_children if c.type not in _TRIVIA]
        )

    def separated(self, *delimiters: str) -> "SeparatedSyntaxList":
        """
        Separator-delimited view of the children. Delimiter tokens such as the
        enclosing brackets or a leading keyword are dropped, the rest must
        alternate payload and ``,`` separator.
        """
        entries = [
            SyntaxNode(c)
            for c in self._node.children
            if c.type not in _TRIVIA and c.type not in delimiters
        ]
        return SeparatedSyntaxList(entries)


# List shapes
class AbstractSyntaxList(ABC):
    """
    Ordered access to payload nodes. Only the adapters below walk these lists.
    """

    @abstractmethod
    def payload_count(self) -> int: ...

    @abstractmethod
    def payloads(self) -> Iterator[SyntaxNode]: ...


class SyntaxList(AbstractSyntaxList):
    """Plain list: every entry is a payload."""

    def __init__(self, entries: Sequence[SyntaxNode]) -> None:
        self._entries = tuple(entries)

    def payload_count(self) -> int:
        return len(self._entries)

    def payloads(self) -> Iterator[SyntaxNode]:
        return iter(self._entries)


class SeparatedSyntaxList(AbstractSyntaxList):
    """Entries alternate payload / separator; payloads sit at even positions."""

    def __init__(self, entries: Sequence[SyntaxNode]) -> None:
        self._entries = tuple(entries)

    def payload_count(self) -> int:
        return (len(self._entries) + 1) // 2

    def separator_count(self) -> int:
        return len(self._entries) // 2

    def payloads(self) -> Iterator[SyntaxNode]:
        return iter(self._entries[0::2])


# Adapters
def map_plain(lst: SyntaxList, f: Callable[[SyntaxNode], R]) -> List[R]:
    return [f(e) for e in lst.payloads()]


def map_separated(lst: SeparatedSyntaxList, f: Callable[[SyntaxNode], R]) -> List[R]:
    return [f(e) for e in lst.payloads()]


def contains_plain(lst: SyntaxList, target: T, f: Callable[[SyntaxNode], T]) -> bool:
    for e in lst.payloads():
        if f(e) == target:
            return True

    return False


class SeparatedIterator(Iterator[SyntaxNode]):
    """
    Forward iterator over the payloads of a separated list, each of which must
    be of the expected kind. State lives in the instance; ``reset`` rewinds it.
    """

    def __init__(self, lst: SeparatedSyntaxList, kind: SyntaxKind) -> None:
        self._list = lst
        self._kind = kind
        self._it = lst.payloads()

    def reset(self) -> None:
        self._it = self._list.payloads()

    def __iter__(self) -> "SeparatedIterator":
        return self

    def __next__(self) -> SyntaxNode:
        node = next(self._it)
        if node.kind != self._kind:
            raise TypeError(
                f"Expected {self._kind.value} in separated list, got {node.type}"
            )
        return node


def iterate_separated(
    lst: SeparatedSyntaxList,
    kind: SyntaxKind = SyntaxKind.VARIABLE_DECLARATOR,
) -> SeparatedIterator:
    return SeparatedIterator(lst, kind)
