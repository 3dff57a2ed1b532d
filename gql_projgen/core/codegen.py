"""Entry point for one code generation run.

Example:
    config = CodeGenConfig(schemas=[sdl], package_name="myapp.generated")
    result = CodeGen(config).generate()
    CodeGenerator(result, config, output_dir="./out").generate()
"""

import logging

from graphql import DocumentNode

from .config import CodeGenConfig
from .hooks import HookRunner
from .ir import CodeGenResult
from .parser import SchemaParser
from .projection_generator import ProjectionGenerator
from .type_utils import find_root_type, find_root_type_name

logger = logging.getLogger(__name__)


class CodeGen:
    """Loads the schema for a config and builds the projection IR."""

    def __init__(
        self,
        config: CodeGenConfig,
        hooks: HookRunner | None = None,
        document: DocumentNode | None = None,
    ):
        """Initialize a run.

        Args:
            config: Generation settings, including the schema sources
            hooks: Optional hooks; pre-generation hooks run on the parsed document
            document: Already parsed document, used instead of config's schema sources
        """
        self.config = config
        self.hooks = hooks or HookRunner()
        self.document = document

    def load_document(self) -> DocumentNode:
        """Return the document to generate from, after pre-generation hooks."""
        document = self.document
        if document is None:
            parser = SchemaParser(self.config.schema_paths, self.config.schemas)
            document = parser.parse_all()
        return self.hooks.run_pre_hooks(document)

    def generate(self) -> CodeGenResult:
        """Generate the root entry point and projections for the configured schema."""
        if not self.config.runs_client_api:
            logger.info(
                "Client API generation disabled (language=%s), nothing to generate",
                self.config.language.value,
            )
            return CodeGenResult()

        document = self.load_document()
        root_type = find_root_type(document)
        if root_type is None:
            logger.warning("Schema has no %s type, nothing to generate", find_root_type_name(document))
            return CodeGenResult()

        return ProjectionGenerator(self.config, document).generate(root_type)
