"""Request projection: which fields a query selects below the current one.

A projection is a nested dict of field names; leaves are ``True``. Fields
can declare an extra ``projection`` extension that is merged in whenever the
field is requested (e.g. a computed ``fullName`` needing ``firstName`` and
``lastName``).
"""

from typing import Any

from graphql import (
    FieldNode,
    FragmentSpreadNode,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLResolveInfo,
    GraphQLWrappingType,
    InlineFragmentNode,
)

from .misc import deepmerge


def get_projection_from_ast(info: GraphQLResolveInfo | None, field_node=None) -> dict[str, Any]:
    if info is None:
        return {}
    projection = get_projection_from_ast_query(info, field_node)
    return extend_by_field_projection(info.return_type, projection)


def get_projection_from_ast_query(info: GraphQLResolveInfo | None, field_node=None) -> dict[str, Any]:
    if info is None:
        return {}

    if field_node is not None:
        selections = list(field_node.selection_set.selections) if field_node.selection_set else []
    else:
        selections = []
        for node in info.field_nodes or []:
            if node.selection_set:
                selections.extend(node.selection_set.selections)

    result: dict[str, Any] = {}
    for ast in selections:
        if isinstance(ast, FieldNode):
            name = ast.name.value
            nested = get_projection_from_ast_query(info, ast) or True
            result[name] = deepmerge(result[name], nested) if name in result else nested
        elif isinstance(ast, InlineFragmentNode):
            result = deepmerge(result, get_projection_from_ast_query(info, ast))
        elif isinstance(ast, FragmentSpreadNode):
            fragment = info.fragments[ast.name.value]
            result = deepmerge(result, get_projection_from_ast_query(info, fragment))
    return result


def get_flat_projection_from_ast(info: GraphQLResolveInfo | None, field_node=None) -> dict[str, bool]:
    return {key: bool(value) for key, value in get_projection_from_ast(info, field_node).items()}


def extend_by_field_projection(return_type, projection: Any) -> Any:
    """Merge the ``projection`` extension of every requested field."""
    gq_type = return_type
    while isinstance(gq_type, GraphQLWrappingType):
        gq_type = gq_type.of_type

    if not isinstance(gq_type, (GraphQLObjectType, GraphQLInterfaceType)) or not isinstance(projection, dict):
        return projection

    result = dict(projection)
    fields = gq_type.fields
    for key in list(projection):
        field = fields.get(key)
        if field is None:
            continue
        field_projection = (field.extensions or {}).get("projection")
        if field_projection:
            result = deepmerge(result, field_projection)
        result[key] = extend_by_field_projection(field.type, result[key])
    return result
