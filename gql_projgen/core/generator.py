"""Code generator for projection IR.

Renders Jinja2 templates to produce Python code from a CodeGenResult.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(result, config, output_dir, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .config import CodeGenConfig
from .errors import CodeGenError, DuplicateClassError
from .hooks import HookRunner
from .ir import ClassRef, CodeGenResult, GeneratedProjection
from .projection_generator import capitalized

logger = logging.getLogger(__name__)

PROJECTIONS_MODULE = "projections"
QUERIES_MODULE = "queries"


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\")
    text = text.replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def package_path(package: str) -> str:
    """Convert a dotted package name to a relative directory, e.g. a.b -> a/b."""
    return package.replace(".", "/")


class CodeGenerator:
    """Generates Python code from projection IR.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - projections.py.j2: Projection classes of one module

    Example:
        generator = CodeGenerator(
            result=CodeGen(config).generate(),
            config=config,
            output_dir="./generated",
        )
        generator.generate()
    """

    def __init__(
        self,
        result: CodeGenResult,
        config: CodeGenConfig,
        output_dir: str,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
    ):
        """Initialize the code generator.

        Args:
            result: The projection IR to render
            config: Generation settings (package names)
            output_dir: Directory where generated code will be written
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional hooks; post-generation hooks run on every file
        """
        self.result = result
        self.config = config
        self.output_dir = output_dir
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_projgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Register custom filters
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring

    def generate(self) -> list[str]:
        """Write all generated files. Returns their paths."""
        written = []
        for relative_path, content in self.render().items():
            full_path = os.path.join(self.output_dir, relative_path)
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "w") as f:
                f.write(content)
            written.append(full_path)
        logger.info("Wrote %d file(s) to %s", len(written), self.output_dir)
        return written

    def render(self) -> Dict[str, str]:
        """Render every generated file without writing it.

        Returns:
            Mapping of path relative to output_dir to file content
        """
        # package -> [(module, class names)]
        exports: Dict[str, list] = {}
        files: Dict[str, str] = {}

        modules = [
            (self.config.package_name_client, PROJECTIONS_MODULE, self.result.client_projections,
             "Generated GraphQL projections."),
            (self.config.package_name_queries, QUERIES_MODULE, self.result.query_types,
             "Generated GraphQL root query projections."),
        ]
        for package, module, projections, doc in modules:
            if not projections:
                continue
            names = [p.name for p in projections]
            self._check_unique(package, names + self._exported_names(exports.get(package, [])))
            exports.setdefault(package, []).append((module, names))
            files[f"{package_path(package)}/{module}.py"] = self._render_module(
                package, module, projections, doc
            )

        files.update(self._render_init_files(exports))
        return {
            path: self._finalize(path, content) for path, content in sorted(files.items())
        }

    def _render_module(
        self,
        package: str,
        module: str,
        projections: list[GeneratedProjection],
        doc: str,
    ) -> str:
        qualified_module = f"{package}.{module}"
        local_names = {p.name for p in projections}

        # module -> imported names
        imports: Dict[str, list] = {}
        # Name a sub-projection class goes by inside this module
        class_names: Dict[ClassRef, str] = {}

        def add_import(module_name: str, entry: str):
            names = imports.setdefault(module_name, [])
            if entry not in names:
                names.append(entry)

        for projection in projections:
            for ref in [projection.base_class, *projection.annotations]:
                add_import(ref.package, ref.name)

        for projection in projections:
            for ref in projection.referenced_classes:
                # Sub-projections are rendered into the projections module of their package
                ref_module = f"{ref.package}.{PROJECTIONS_MODULE}"
                if ref_module == qualified_module:
                    class_names[ref] = ref.name
                elif ref.name in local_names:
                    # e.g. a Relay 'viewer: Query' field seen from the root module
                    alias = capitalized(ref.package.rsplit(".", 1)[-1]) + ref.name
                    add_import(ref_module, f"{ref.name} as {alias}")
                    class_names[ref] = alias
                else:
                    add_import(ref_module, ref.name)
                    class_names[ref] = ref.name

        context: Dict[str, Any] = {
            "module_doc": doc,
            "imports": sorted(imports.items()),
            "projections": projections,
            "class_names": class_names,
        }
        return self.env.get_template("projections.py.j2").render(context)

    def _render_init_files(self, exports: Dict[str, list]) -> Dict[str, str]:
        """Render __init__.py for every package on the way to the generated modules."""
        files: Dict[str, str] = {}
        packages = set()
        for package in exports:
            parts = package.split(".")
            for i in range(1, len(parts) + 1):
                packages.add(".".join(parts[:i]))

        for package in sorted(packages):
            lines = ['"""Generated GraphQL client package."""', ""]
            modules = exports.get(package, [])
            if modules:
                for module, names in modules:
                    lines.append(f"from .{module} import (")
                    lines.extend(f"    {name}," for name in names)
                    lines.append(")")
                lines.append("")
                lines.append("__all__ = [")
                lines.extend(f'    "{name}",' for name in self._exported_names(modules))
                lines.append("]")
                lines.append("")
            files[f"{package_path(package)}/__init__.py"] = "\n".join(lines)
        return files

    def _finalize(self, path: str, content: str) -> str:
        """Run post-generation hooks and validate Python syntax."""
        content = self.hooks.run_post_hooks(path, content)
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise CodeGenError(f"Generated invalid Python for {path}: {e}") from e
        return content

    @staticmethod
    def _exported_names(modules: list) -> list[str]:
        return [name for _, names in modules for name in names]

    @staticmethod
    def _check_unique(package: str, names: list[str]):
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise DuplicateClassError(package, name)
            seen.add(name)
