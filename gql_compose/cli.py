"""Command-line interface for gql-compose."""

import logging
from pathlib import Path

import click
from graphql import print_schema
from jinja2 import Environment, FileSystemLoader

from .core import (
    EnumTypeComposer,
    InputTypeComposer,
    InterfaceTypeComposer,
    ObjectTypeComposer,
    ScalarTypeComposer,
    UnionTypeComposer,
)
from .core.errors import ComposeError
from .core.loader import collect_schema_files, load_schema_composer
from .core.schema_composer import SchemaComposer
from .core.type_mapper import BUILT_IN_SCALAR_NAMES

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Kinds in the order the summary lists them
SUMMARY_KINDS = (
    ("Object types", ObjectTypeComposer),
    ("Interfaces", InterfaceTypeComposer),
    ("Unions", UnionTypeComposer),
    ("Input types", InputTypeComposer),
    ("Enums", EnumTypeComposer),
    ("Scalars", ScalarTypeComposer),
)


def _load(schema: str) -> SchemaComposer:
    if not collect_schema_files(schema):
        raise click.ClickException(f"No .graphql or .graphqls files found in {schema}")
    try:
        return load_schema_composer(schema)
    except ComposeError as e:
        raise click.ClickException(str(e)) from e


def _describe_type(tc) -> dict:
    """Plain data about one composer for the summary template."""
    info = {
        "name": tc.get_type_name(),
        "description": tc.get_description(),
        "directives": tc.get_directive_names(),
        "fields": [],
        "members": [],
        "resolvers": [],
    }
    if isinstance(tc, UnionTypeComposer):
        info["members"] = tc.get_type_names()
    elif hasattr(tc, "get_field_names"):
        for name in tc.get_field_names():
            config = tc.get_field(name)
            type_ref = config.get("type")
            info["fields"].append(
                {
                    "name": name,
                    "type": type_ref.get_type_name() if type_ref is not None else None,
                    "args": [
                        f"{arg_name}: {arg['type'].get_type_name()}"
                        for arg_name, arg in (config.get("args") or {}).items()
                    ],
                    "deprecated": bool(config.get("deprecation_reason")),
                }
            )
    if hasattr(tc, "get_resolvers"):
        info["resolvers"] = sorted(tc.get_resolvers())
    return info


def render_summary(sc: SchemaComposer) -> str:
    composers = {}
    for tc in sc.values():
        if hasattr(tc, "get_type_name") and tc.get_type_name() not in BUILT_IN_SCALAR_NAMES:
            composers.setdefault(tc.get_type_name(), tc)

    sections = []
    for title, tc_cls in SUMMARY_KINDS:
        types = [
            _describe_type(tc)
            for name, tc in sorted(composers.items())
            if isinstance(tc, tc_cls)
        ]
        if types:
            sections.append({"title": title, "types": types})

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("summary.txt.j2")
    directives = [d.name for d in sc.get_directives()]
    return template.render(sections=sections, directives=directives)


@click.group()
@click.version_option(package_name="gql-compose")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose (debug) logging.",
)
def main(verbose: bool):
    """Compose GraphQL schemas from SDL files.

    Load type definitions, merge them into one schema and print or inspect it.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("print-sdl")
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a .graphql/.graphqls file or a directory of them.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Write the SDL to this file instead of stdout.",
)
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Type name to leave out of the printed SDL (repeatable).",
)
def print_sdl(schema: str, output: str | None, exclude: tuple[str, ...]):
    """Build the composed schema and print it as SDL.

    Examples:

        gql-compose print-sdl --schema ./schema

        gql-compose print-sdl -s ./schema -o ./merged.graphql -e Internal
    """
    sc = _load(schema)
    try:
        built = sc.build_schema()
        sdl = sc.to_sdl(exclude=list(exclude)) if exclude else print_schema(built)
    except ComposeError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(sdl)
        return

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(sdl + "\n")
    click.echo(f"Done! Wrote schema SDL to {output_path}")


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a .graphql/.graphqls file or a directory of them.",
)
def inspect(schema: str):
    """Summarize the composed types: fields, arguments, resolvers and directives."""
    sc = _load(schema)
    try:
        summary = render_summary(sc)
    except ComposeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(summary, nl=False)


if __name__ == "__main__":
    main()
