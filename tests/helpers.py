from pathlib import Path
from typing import Optional

from tskt.parsers import parse_source
from tskt.syntax import SyntaxNode
from tskt.typenames import declared_type

SAMPLES_DIR = Path(__file__).parent / "samples"


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #
def find_first(root: SyntaxNode, node_type: str) -> Optional[SyntaxNode]:
    """Breadth-first search for the first node of the given grammar type."""
    queue = [root]
    while queue:
        cur = queue.pop(0)
        if cur.type == node_type:
            return cur
        queue.extend(cur.named_children().payloads())
    return None


def type_node(type_src: str) -> SyntaxNode:
    """Parse ``let x: <type_src>;`` and return the annotated type node."""
    root = parse_source(f"let x: {type_src};")
    decl = find_first(root, "variable_declarator")
    assert decl is not None
    node = declared_type(decl)
    assert node is not None
    return node


def param_nodes(params_src: str) -> list[SyntaxNode]:
    """Parse ``function f(<params_src>) {}`` and return the parameter nodes."""
    root = parse_source(f"function f({params_src}) {{}}")
    params = find_first(root, "formal_parameters")
    assert params is not None
    return list(params.separated("(", ")").payloads())


def param_node(param_src: str) -> SyntaxNode:
    nodes = param_nodes(param_src)
    assert len(nodes) == 1
    return nodes[0]
