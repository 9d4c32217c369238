"""Tests for the gql-compose command-line interface."""

import pytest
from click.testing import CliRunner

from gql_compose.cli import main, render_summary
from gql_compose.core.schema_composer import SchemaComposer


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_dir(tmp_path):
    (tmp_path / "a_query.graphql").write_text("type Query { me: User }\n")
    (tmp_path / "b_user.graphqls").write_text(
        '"Account owner"\n'
        "type User { id: ID! name: String @deprecated(reason: \"Use fullName\") fullName: String }\n"
        "extend type Query { users(limit: Int): [User] }\n"
        "enum Role { ADMIN USER }\n"
    )
    (tmp_path / "notes.txt").write_text("not a schema")
    return tmp_path


class TestPrintSdl:
    """Tests for the print-sdl command."""

    def test_prints_to_stdout(self, runner, schema_dir):
        result = runner.invoke(main, ["print-sdl", "--schema", str(schema_dir)])
        assert result.exit_code == 0, result.output
        assert "type Query {\n  me: User\n  users(limit: Int): [User]\n}" in result.output
        assert "type User {" in result.output

    def test_writes_file(self, runner, schema_dir, tmp_path_factory):
        output = tmp_path_factory.mktemp("out") / "nested" / "schema.graphql"
        result = runner.invoke(main, ["print-sdl", "-s", str(schema_dir), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "Done! Wrote schema SDL to" in result.output
        assert "type User {" in output.read_text()

    def test_exclude(self, runner, schema_dir):
        result = runner.invoke(main, ["print-sdl", "-s", str(schema_dir), "-e", "Role"])
        assert result.exit_code == 0, result.output
        assert "enum Role" not in result.output
        assert "type User {" in result.output

    def test_single_file(self, runner, tmp_path):
        schema_file = tmp_path / "schema.graphql"
        schema_file.write_text("type Query { ping: String }\n")
        result = runner.invoke(main, ["-v", "print-sdl", "-s", str(schema_file)])
        assert result.exit_code == 0, result.output
        assert "ping: String" in result.output

    def test_no_schema_files(self, runner, tmp_path):
        result = runner.invoke(main, ["print-sdl", "-s", str(tmp_path)])
        assert result.exit_code == 1
        assert "No .graphql or .graphqls files found" in result.output

    def test_malformed_sdl(self, runner, tmp_path):
        (tmp_path / "broken.graphql").write_text("type Query {")
        result = runner.invoke(main, ["print-sdl", "-s", str(tmp_path)])
        assert result.exit_code == 1
        assert "correct SDL syntax" in result.output

    def test_missing_query(self, runner, tmp_path):
        (tmp_path / "types.graphql").write_text("type User { id: ID }")
        result = runner.invoke(main, ["print-sdl", "-s", str(tmp_path)])
        assert result.exit_code == 1
        assert "NoRootType" in result.output


class TestInspect:
    """Tests for the inspect command."""

    def test_summary(self, runner, schema_dir):
        result = runner.invoke(main, ["inspect", "--schema", str(schema_dir)])
        assert result.exit_code == 0, result.output
        assert "Object types (2)" in result.output
        assert "  me: User" in result.output
        assert "  users(limit: Int): [User]" in result.output
        assert "  # Account owner" in result.output
        assert "  name: String (deprecated)" in result.output
        assert "Enums (1)" in result.output
        assert "@deprecated" in result.output

    def test_render_summary_members_and_resolvers(self):
        sc = SchemaComposer()
        sc.add_type_defs("type A { a: Int } type B { b: Int } union AB = A | B")
        sc.get_otc("A").add_resolver({"name": "findMany", "type": "[A]"})
        summary = render_summary(sc)
        assert "Unions (1)\n======\nAB\n  = A | B\n" in summary
        assert "  resolvers: findMany" in summary
        assert "Interfaces" not in summary
