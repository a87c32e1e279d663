from pathlib import Path
from typing import Dict, Optional, Union

import tree_sitter as ts
import tree_sitter_typescript as tsts

from tskt.settings import Grammar
from tskt.syntax import SyntaxNode

_LANGUAGES: Dict[Grammar, ts.Language] = {}
_parsers: Dict[Grammar, ts.Parser] = {}


def _get_language(grammar: Grammar) -> ts.Language:
    lang = _LANGUAGES.get(grammar)
    if lang is None:
        if grammar == Grammar.TSX:
            lang = ts.Language(tsts.language_tsx())
        else:
            lang = ts.Language(tsts.language_typescript())
        _LANGUAGES[grammar] = lang
    return lang


def _get_parser(grammar: Grammar) -> ts.Parser:
    parser = _parsers.get(grammar)
    if parser is None:
        parser = ts.Parser(_get_language(grammar))
        _parsers[grammar] = parser
    return parser


def parse_source(
    source: Union[str, bytes], grammar: Grammar = Grammar.TYPESCRIPT
) -> SyntaxNode:
    """
    Parse TypeScript source and return the ``program`` root node.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = _get_parser(grammar).parse(source)
    return SyntaxNode(tree.root_node)


def parse_file(path: Union[str, Path], grammar: Optional[Grammar] = None) -> SyntaxNode:
    p = Path(path)
    if grammar is None:
        grammar = Grammar.TSX if p.suffix == ".tsx" else Grammar.TYPESCRIPT
    return parse_source(p.read_bytes(), grammar)
