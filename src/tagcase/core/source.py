import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from tagcase.core.errors import ParseError
from tagcase.models import SourceFile

logger = logging.getLogger(__name__)

GO_LANGUAGE = "go"

_TOP_LEVEL_NODE_TYPES = frozenset(
    {
        "package_clause",
        "import_declaration",
        "function_declaration",
        "method_declaration",
        "type_declaration",
        "const_declaration",
        "var_declaration",
        "comment",
    }
)


@lru_cache(maxsize=None)
def load_query(query_type: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{GO_LANGUAGE}_{query_type}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, GO_LANGUAGE)), query_text)


@dataclass(frozen=True)
class ParsedUnit:
    """Syntax tree of one Go file together with the bytes it was parsed from."""

    source_file: SourceFile
    source_bytes: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def line_of(self, node: Node) -> int:
        return node.start_point[0] + 1


def _first_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _raise_for_errors(tree: Tree, source_file: SourceFile) -> None:
    root = tree.root_node
    if not root.has_error:
        return
    node = _first_error(root) or root
    line, column = node.start_point[0] + 1, node.start_point[1] + 1
    message = f"missing '{node.type}'" if node.is_missing else "syntax error"
    raise ParseError(source_file.display_path, line, column, message)


def _check_top_level(tree: Tree, source_file: SourceFile) -> None:
    """Reject files the grammar accepts but a Go compiler does not.

    The file must open with a package clause and may only hold declarations
    at the top level.
    """
    children = [child for child in tree.root_node.named_children if child.type != "comment"]
    if not children or children[0].type != "package_clause":
        node = children[0] if children else tree.root_node
        raise ParseError(
            source_file.display_path,
            node.start_point[0] + 1,
            node.start_point[1] + 1,
            "expected 'package'",
        )
    for child in children:
        if child.type not in _TOP_LEVEL_NODE_TYPES:
            raise ParseError(
                source_file.display_path,
                child.start_point[0] + 1,
                child.start_point[1] + 1,
                "syntax error",
            )


def parse_source(source_bytes: bytes, source_file: SourceFile) -> ParsedUnit:
    parser = get_parser(cast(SupportedLanguage, GO_LANGUAGE))
    tree = parser.parse(source_bytes)
    _raise_for_errors(tree, source_file)
    _check_top_level(tree, source_file)
    return ParsedUnit(source_file=source_file, source_bytes=source_bytes, tree=tree)


def parse_file(source_file: SourceFile) -> ParsedUnit:
    logger.debug("Parsing %s", source_file.display_path)
    try:
        source_bytes = Path(source_file.path).read_bytes()
    except OSError as exc:
        raise ParseError(source_file.display_path, 0, 0, exc.strerror or str(exc)) from exc
    return parse_source(source_bytes, source_file)
