"""GraphQL schema loader using graphql-core.

Parses .graphql/.graphqls files and inline SDL into a single DocumentNode.
"""

import logging
import os
from pathlib import Path

from graphql import DocumentNode, GraphQLSyntaxError, concat_ast, parse

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphqls", ".graphql")


class SchemaParser:
    """Parses GraphQL schema files and strings into one document."""

    def __init__(
        self,
        schema_paths: list[str | Path] | None = None,
        schemas: list[str] | None = None,
    ):
        """Initialize a parser with schema files/directories and inline SDL strings."""
        self.schema_paths = [Path(p) for p in schema_paths or []]
        self.schemas = list(schemas or [])
        self.current_file = ""

    def parse_all(self) -> DocumentNode:
        """Parse all schema sources and return the combined document.

        Files are read in sorted order, inline schemas after them.
        """
        documents = []

        for file_path in self._collect_schema_files():
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                content = f.read()
            documents.append(self._parse(content, self.current_file))

        for index, content in enumerate(self.schemas):
            self.current_file = f"<schema {index}>"
            documents.append(self._parse(content, self.current_file))

        logger.debug("Parsed %d schema source(s)", len(documents))
        return concat_ast(documents)

    @staticmethod
    def parse_string(content: str) -> DocumentNode:
        """Parse a single SDL string."""
        return parse(content)

    def _parse(self, content: str, source_name: str) -> DocumentNode:
        try:
            return parse(content)
        except GraphQLSyntaxError as e:
            logger.error("Error parsing %s: %s", source_name, e)
            raise

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from the configured paths."""
        files = []
        for schema_path in self.schema_paths:
            if schema_path.is_file():
                if schema_path.name.endswith(SCHEMA_EXTENSIONS):
                    files.append(str(schema_path))
            else:
                for root, _, filenames in os.walk(schema_path):
                    for filename in filenames:
                        if filename.endswith(SCHEMA_EXTENSIONS):
                            files.append(os.path.join(root, filename))
        return sorted(files)
