"""Command-line interface for gql-projgen."""

import logging
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

import click
from graphql import GraphQLSyntaxError
from pydantic import ValidationError

from .core.codegen import CodeGen
from .core.config import CodeGenConfig
from .core.errors import CodeGenError
from .core.generator import CodeGenerator
from .core.hooks import AddHeaderHook, HookRunner

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def parse_includes(includes: tuple[str, ...]) -> dict[str, list[str]]:
    """Turn ('Query.people', 'Query.') into {'Query': ['people']}.

    'Type.' with no field name restricts the type to no fields at all.
    """
    result: dict[str, list[str]] = {}
    for item in includes:
        type_name, sep, field_name = item.partition(".")
        if not sep or not type_name:
            raise click.BadParameter(f"Expected Type.field, got {item!r}", param_hint="--include")
        fields = result.setdefault(type_name, [])
        if field_name:
            fields.append(field_name)
    return result


@click.group()
@click.version_option(package_name="gql-projgen")
def main():
    """Typed GraphQL projection generator for Python.

    Generate projection classes for building GraphQL selection sets.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    "schemas",
    multiple=True,
    type=click.Path(exists=True),
    help="GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz). Can be repeated.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output directory for generated code.",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with CodeGenConfig settings.",
)
@click.option(
    "--package-name",
    "-p",
    help="Base package of the generated code (default: generated).",
)
@click.option(
    "--include",
    "-i",
    "includes",
    multiple=True,
    help="Restrict a type to the named fields, as Type.field. Can be repeated.",
)
@click.option(
    "--header",
    help="Header comment prepended to every generated file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schemas: tuple[str, ...],
    output: str,
    config_file: str | None,
    package_name: str | None,
    includes: tuple[str, ...],
    header: str | None,
    verbose: bool,
):
    """Generate projection classes from a GraphQL schema.

    Examples:

        gql-projgen generate --schema ./schema --output ./src

        gql-projgen generate -s ./schema.graphqls -o ./src -p myapp.graphql

        gql-projgen generate -s ./schema.tgz -o ./src -i Query.people -i Query.movies
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    output_path = Path(output).resolve()
    temp_dirs = []

    try:
        try:
            config = CodeGenConfig.from_file(config_file) if config_file else CodeGenConfig()
            overrides = {}
            if package_name:
                overrides["package_name"] = package_name
            if includes:
                overrides["include_fields"] = {**config.include_fields, **parse_includes(includes)}
            config = CodeGenConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as e:
            raise click.ClickException(f"Invalid configuration:\n{e}")

        # Handle archives
        schema_paths = list(config.schema_paths)
        for schema in schemas:
            schema_path = Path(schema).resolve()
            if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
                click.echo(f"Extracting archive {schema_path.name}...")
                temp_dir = extract_archive(schema_path)
                temp_dirs.append(temp_dir)
                schema_path = Path(temp_dir)
                if verbose:
                    click.echo(f"  Extracted to: {temp_dir}")
            schema_paths.append(schema_path)

        if not schema_paths and not config.schemas:
            raise click.UsageError("No schema given. Use --schema or schema_paths in --config.")
        config = config.model_copy(update={"schema_paths": schema_paths})

        if verbose:
            for path in schema_paths:
                click.echo(f"Schema: {path}")
            click.echo(f"Output: {output_path}")
            click.echo(f"Package: {config.package_name}")

        hooks = HookRunner()
        if header:
            hooks.add_post_hook(AddHeaderHook(header if header.startswith("#") else f"# {header}"))

        # Build projections
        click.echo("Parsing schema...")
        try:
            result = CodeGen(config, hooks=hooks).generate()
        except GraphQLSyntaxError as e:
            raise click.ClickException(f"Invalid schema: {e.message}")
        except CodeGenError as e:
            raise click.ClickException(str(e))

        if verbose:
            click.echo(f"  Root types: {len(result.query_types)}")
            click.echo(f"  Projections: {len(result.client_projections)}")

        # Generate code
        click.echo("Generating code...")
        generator = CodeGenerator(result, config, str(output_path), hooks=hooks)
        try:
            written = generator.generate()
        except CodeGenError as e:
            raise click.ClickException(str(e))

        if verbose:
            for path in written:
                click.echo(f"  {path}")

        click.echo(
            f"Done! Generated {len(result.client_projections)} projections "
            f"in {len(written)} files under {output_path}"
        )
    finally:
        # Clean up temp directories
        for temp_dir in temp_dirs:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
