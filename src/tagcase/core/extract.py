from collections.abc import Iterator

from tree_sitter import Node, QueryCursor

from tagcase.core.source import ParsedUnit, load_query
from tagcase.core.tags import strip_tag_delimiters
from tagcase.models import StructField, StructTypeDecl


def _field_list(struct_node: Node) -> Node | None:
    for child in struct_node.named_children:
        if child.type == "field_declaration_list":
            return child
    return None


def _to_field(unit: ParsedUnit, node: Node) -> StructField:
    type_node = node.child_by_field_name("type")
    type_text = unit.text(type_node) if type_node is not None else ""
    names = tuple(unit.text(name) for name in node.children_by_field_name("name"))
    if not names:
        # embedded field, named after its type
        names = (type_text.split("[", 1)[0].rsplit(".", 1)[-1],)

    tag_node = node.child_by_field_name("tag")
    if tag_node is None:
        return StructField(names=names, type_text=type_text, line=unit.line_of(node))
    return StructField(
        names=names,
        type_text=type_text,
        line=unit.line_of(tag_node),
        tag=strip_tag_delimiters(unit.text(tag_node)),
    )


def _struct_fields(unit: ParsedUnit, struct_node: Node) -> Iterator[StructField]:
    field_list = _field_list(struct_node)
    if field_list is None:
        return
    for child in field_list.named_children:
        if child.type == "field_declaration":
            yield _to_field(unit, child)


def iter_struct_types(unit: ParsedUnit) -> Iterator[StructTypeDecl]:
    """Yield struct types declared at the top level of ``unit``, in source order."""
    cursor = QueryCursor(load_query("struct_types"))
    found: list[tuple[int, Node, Node]] = []
    for _, captures in cursor.matches(unit.root):
        decl = captures["struct.decl"][0]
        found.append((decl.start_byte, captures["struct.name"][0], captures["struct.body"][0]))
    found.sort(key=lambda item: item[0])

    for _, name_node, body_node in found:
        yield StructTypeDecl(
            name=unit.text(name_node),
            line=unit.line_of(name_node),
            fields=tuple(_struct_fields(unit, body_node)),
        )


def iter_tagged_fields(unit: ParsedUnit) -> Iterator[StructField]:
    for decl in iter_struct_types(unit):
        for field in decl.fields:
            if field.tag is not None:
                yield field
