"""Tests for the command-line interface."""

import json
import tarfile
import zipfile
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from gql_projgen.cli import main, parse_includes


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path, person_schema) -> Path:
    path = tmp_path / "schema.graphqls"
    path.write_text(person_schema)
    return path


def read(path: Path) -> str:
    return path.read_text()


class TestParseIncludes:
    """Tests for parse_includes."""

    def test_groups_by_type(self):
        assert parse_includes(("Query.people", "Query.movies", "Person.name")) == {
            "Query": ["people", "movies"],
            "Person": ["name"],
        }

    def test_type_without_field(self):
        assert parse_includes(("Query.",)) == {"Query": []}

    @pytest.mark.parametrize("value", ["Query", ".people"])
    def test_invalid(self, value):
        with pytest.raises(click.BadParameter):
            parse_includes((value,))


class TestGenerateCommand:
    """Tests for 'gql-projgen generate'."""

    def test_writes_package(self, runner, tmp_path, schema_file):
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Generated 2 projections in 5 files" in result.output
        assert "class PersonProjection(BaseProjectionNode):" in read(out / "generated" / "client" / "projections.py")
        assert "class QueryProjection(BaseProjectionNode):" in read(out / "generated" / "queries" / "queries.py")

    def test_package_name(self, runner, tmp_path, schema_file):
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(out), "-p", "myapp.gql"])

        assert result.exit_code == 0, result.output
        assert (out / "myapp" / "gql" / "client" / "projections.py").is_file()

    def test_include(self, runner, tmp_path, schema_file):
        out = tmp_path / "out"
        result = runner.invoke(
            main,
            ["generate", "-s", str(schema_file), "-o", str(out), "-i", "Person.firstname"],
        )

        assert result.exit_code == 0, result.output
        content = read(out / "generated" / "client" / "projections.py")
        assert "def firstname(self)" in content
        assert "def lastname(self)" not in content
        assert "AddressProjection" not in content

    def test_bad_include(self, runner, tmp_path, schema_file):
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(tmp_path), "-i", "people"])
        assert result.exit_code == 2
        assert "Expected Type.field" in result.output

    def test_header(self, runner, tmp_path, schema_file):
        out = tmp_path / "out"
        result = runner.invoke(
            main,
            ["generate", "-s", str(schema_file), "-o", str(out), "--header", "Copyright Example"],
        )

        assert result.exit_code == 0, result.output
        assert read(out / "generated" / "client" / "projections.py").startswith("# Copyright Example\n\n")

    def test_config_file(self, runner, tmp_path, schema_file):
        config_file = tmp_path / "codegen.json"
        config_file.write_text(json.dumps({
            "schema_paths": [str(schema_file)],
            "package_name": "fromconfig",
            "include_fields": {"Query": []},
        }))
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-c", str(config_file), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Generated 0 projections" in result.output
        assert (out / "fromconfig" / "queries" / "queries.py").is_file()
        assert not (out / "fromconfig" / "client").exists()

    def test_invalid_config(self, runner, tmp_path):
        config_file = tmp_path / "codegen.json"
        config_file.write_text(json.dumps({"unknown_setting": True}))
        result = runner.invoke(main, ["generate", "-c", str(config_file), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_no_schema(self, runner, tmp_path):
        result = runner.invoke(main, ["generate", "-o", str(tmp_path)])
        assert result.exit_code == 2
        assert "No schema given" in result.output

    def test_invalid_schema(self, runner, tmp_path):
        broken = tmp_path / "broken.graphqls"
        broken.write_text("type Query {")
        result = runner.invoke(main, ["generate", "-s", str(broken), "-o", str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "Invalid schema" in result.output

    def test_type_name_clash(self, runner, tmp_path):
        schema = tmp_path / "clash.graphqls"
        schema.write_text("type Query { a: person b: Person } type person { x: Int } type Person { y: Int }")
        result = runner.invoke(main, ["generate", "-s", str(schema), "-o", str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "Types person and Person both generate PersonProjection" in result.output

    def test_zip_archive(self, runner, tmp_path, person_schema):
        archive = tmp_path / "schema.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("schema/person.graphqls", person_schema)
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-s", str(archive), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Extracting archive schema.zip" in result.output
        assert (out / "generated" / "client" / "projections.py").is_file()

    def test_tgz_archive(self, runner, tmp_path, schema_file):
        archive = tmp_path / "schema.tgz"
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(schema_file, arcname="person.graphqls")
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-s", str(archive), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert (out / "generated" / "queries" / "queries.py").is_file()

    def test_verbose(self, runner, tmp_path, schema_file):
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(tmp_path / "out"), "-v"])
        assert result.exit_code == 0, result.output
        assert "Projections: 2" in result.output
