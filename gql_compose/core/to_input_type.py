"""Derive input object types from object and interface types."""

import logging

from .misc import upper_first
from .options import ToInputTypeOpts, parse_options
from .type_helpers import replace_tc, unwrap_tc

logger = logging.getLogger(__name__)


def to_input_type(tc, opts: ToInputTypeOpts | dict | None = None, cache: dict | None = None):
    """Build (and register) ``{prefix}{TypeName}{postfix}`` with the data fields of ``tc``.

    Relation fields and union typed fields are skipped. Object and interface
    typed fields are converted recursively, their input types named with the
    parent type name added to the prefix, e.g. ``PersonAddressInput``.
    """
    from .input_type import InputTypeComposer

    opts = parse_options(ToInputTypeOpts, opts)
    if cache is None:
        cache = {}
    if tc in cache:
        return cache[tc]
    if tc.has_input_type_composer():
        return tc.get_input_type_composer()

    sc = tc.schema_composer
    input_type_name = f"{opts.prefix}{tc.get_type_name()}{opts.postfix}"
    if sc.has_instance(input_type_name, InputTypeComposer):
        itc = sc.get(input_type_name)
        cache[tc] = itc
        return itc

    itc = InputTypeComposer.create(input_type_name, sc)
    cache[tc] = itc

    relations = tc.get_relations() if hasattr(tc, "get_relations") else {}
    fields = {}
    for field_name in tc.get_field_names():
        if field_name in relations:
            continue
        config = tc.get_field(field_name)
        input_type = _convert_field_type(tc, field_name, config["type"], opts, cache)
        if input_type is None:
            continue
        fields[field_name] = {"type": input_type, "description": config.get("description")}
    itc.add_fields(fields)
    return itc


def _convert_field_type(owner, field_name: str, type_ref, opts: ToInputTypeOpts, cache: dict):
    from .interface_type import InterfaceTypeComposer
    from .object_type import ObjectTypeComposer
    from .union_type import UnionTypeComposer

    field_tc = unwrap_tc(type_ref)
    path = f"{owner.get_type_name()}.{field_name}"

    if isinstance(field_tc, UnionTypeComposer):
        logger.warning("Skipping %s: union types have no input counterpart", path)
        return None
    if isinstance(field_tc, (ObjectTypeComposer, InterfaceTypeComposer)):
        nested_opts = ToInputTypeOpts(
            prefix=f"{opts.prefix}{upper_first(owner.get_type_name())}",
            postfix=opts.postfix,
        )
        return replace_tc(type_ref, to_input_type(field_tc, nested_opts, cache))
    if field_tc.is_input_kind:
        return replace_tc(type_ref, field_tc)

    logger.warning("Skipping %s: cannot convert %r to an input type", path, field_tc)
    return None

