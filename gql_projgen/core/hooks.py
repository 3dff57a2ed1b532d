"""Extension points around projection generation.

A run has two hook stages:

- pre-generation hooks rewrite the parsed schema ``DocumentNode`` before
  any projection is built, e.g. to hide internal types;
- post-generation hooks rewrite the text of each rendered file before it
  is syntax-checked and written.

    hooks = HookRunner()
    hooks.add_pre_hook(FilterTypesHook(exclude_prefix="_"))
    hooks.add_post_hook(AddHeaderHook("# Generated from schema.graphqls"))
    result = CodeGen(config, hooks=hooks).generate()
    CodeGenerator(result, config, "./out", hooks=hooks).generate()
"""

from typing import Protocol, runtime_checkable

from graphql import DocumentNode, TypeDefinitionNode, TypeExtensionNode


@runtime_checkable
class PreGenerateHook(Protocol):
    """Rewrites the schema document a run generates from."""

    def pre_generate(self, document: DocumentNode) -> DocumentNode:
        """Return the document projections should be built from."""
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Rewrites one rendered file.

    ``filename`` is relative to the output directory, e.g.
    ``generated/client/projections.py``.
    """

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Prepends a fixed header, followed by one blank line, to every file."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        header = self.header.rstrip("\n")
        return f"{header}\n\n{content}"


class FilterTypesHook:
    """Drops type definitions and extensions by name.

    Schema definitions and directives are kept. A field whose type was
    dropped has nothing to resolve to and is generated as a leaf.
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def keeps(self, type_name: str) -> bool:
        """Check a type name against the configured prefixes and suffixes."""
        if self.exclude_prefix and type_name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and type_name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not type_name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not type_name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, document: DocumentNode) -> DocumentNode:
        definitions = [
            node
            for node in document.definitions
            if not isinstance(node, (TypeDefinitionNode, TypeExtensionNode))
            or self.keeps(node.name.value)
        ]
        return DocumentNode(definitions=definitions, loc=document.loc)


class HookRunner:
    """Holds the hooks of one run and applies them in registration order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, document: DocumentNode) -> DocumentNode:
        for hook in self.pre_hooks:
            document = hook.pre_generate(document)
        return document

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
