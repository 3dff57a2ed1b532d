"""Projection generator for GraphQL object types.

Walks the type graph from the root query type and produces one projection
per reachable object type:

    QueryProjection().people(lambda person: person.firstname().address(
        lambda address: address.street()
    ))

Projections are deduplicated by class name with a registry that lives for
one generate() call. It maps each class name to the type it was built from.
A class name is registered before its fields are visited, which is what
stops the walk on cyclic schemas (A -> B -> A). Two types that map to the
same class name (person and Person) raise TypeNameClashError.
"""

import logging

from graphql import DocumentNode, FieldDefinitionNode

from .config import CodeGenConfig
from .errors import TypeNameClashError
from .field_filter import filter_fields
from .ir import AccessorKind, ClassRef, CodeGenResult, GeneratedAccessor, GeneratedProjection
from .sanitizer import sanitize
from .type_utils import (
    TypeNodeDefinition,
    find_type_definition,
    is_projectable,
    merged_field_definitions,
)

logger = logging.getLogger(__name__)


def capitalized(name: str) -> str:
    """Upper-case the first letter only, e.g. person -> Person."""
    return name[:1].upper() + name[1:]


def projection_class_name(type_name: str) -> str:
    """Return the generated class name for a type, e.g. Person -> PersonProjection."""
    return sanitize(f"{capitalized(type_name)}Projection")


class ProjectionGenerator:
    """Generates projection IR from a schema document."""

    def __init__(self, config: CodeGenConfig, document: DocumentNode):
        self.config = config
        self.document = document

    def generate(self, root_type: TypeNodeDefinition) -> CodeGenResult:
        """Generate the root entry point and all projections reachable from it."""
        generated: dict[str, str] = {}
        result = self.create_root_projection(root_type, generated)
        logger.info(
            "Generated %d root type(s) and %d projection(s) from %s",
            len(result.query_types),
            len(result.client_projections),
            root_type.name.value,
        )
        return result

    def create_root_projection(
        self,
        root_type: TypeNodeDefinition,
        generated: dict[str, str],
    ) -> CodeGenResult:
        """Build the root entry point.

        Only fields that resolve to object types get an accessor on the root.
        The root itself is never looked up in or added to the registry.
        """
        root_name = root_type.name.value
        accessors: list[GeneratedAccessor] = []
        used_names: set[str] = set()
        nested = CodeGenResult()

        fields = filter_fields(
            merged_field_definitions(root_type, self.document), root_name, self.config
        )
        for field_def in fields:
            type_def = find_type_definition(field_def.type, self.document, exclude_extensions=True)
            if not is_projectable(type_def):
                logger.debug("Root field %s.%s is not an object type, no entry point", root_name, field_def.name.value)
                continue
            accessors.append(self._composite_accessor(field_def, type_def, used_names))
            nested = nested.merge(self.create_projection(type_def, type_def.name.value, generated))

        root = GeneratedProjection(
            class_ref=ClassRef(self.config.package_name_queries, projection_class_name(root_name)),
            source_type=root_name,
            accessors=accessors,
            description=self._description(root_type),
            is_root=True,
        )
        return CodeGenResult(query_types=[root]).merge(nested)

    def create_projection(
        self,
        type_def: TypeNodeDefinition,
        prefix: str,
        generated: dict[str, str],
    ) -> CodeGenResult:
        """Build the projection for an object type and, first, for its nested object types.

        Args:
            type_def: The object type to project
            prefix: Name the class is derived from (prefix + "Projection")
            generated: Class names already handled in this run, mapped to their type name

        Returns:
            Nested projections followed by this one, or an empty result
            if the class name was already handled

        Raises:
            TypeNameClashError: If the class name was registered for another type
        """
        class_name = projection_class_name(prefix)
        type_name = type_def.name.value
        if class_name in generated:
            if generated[class_name] != type_name:
                raise TypeNameClashError(
                    self.config.package_name_client, class_name, (generated[class_name], type_name)
                )
            logger.debug("Projection %s already generated, skipping", class_name)
            return CodeGenResult()
        generated[class_name] = type_name

        accessors: list[GeneratedAccessor] = []
        used_names: set[str] = set()
        nested = CodeGenResult()

        fields = filter_fields(
            merged_field_definitions(type_def, self.document), type_name, self.config
        )
        for field_def in fields:
            has_arguments = bool(field_def.arguments)
            field_type = find_type_definition(
                field_def.type,
                self.document,
                exclude_extensions=True,
                include_base_types=has_arguments,
                include_scalar_types=has_arguments,
            )
            if is_projectable(field_type):
                accessors.append(self._composite_accessor(field_def, field_type, used_names))
                nested = nested.merge(
                    self.create_projection(field_type, field_type.name.value, generated)
                )
            else:
                if field_type is None:
                    logger.debug("No definition for %s.%s, treating as leaf", type_name, field_def.name.value)
                accessors.append(self._leaf_accessor(field_def, used_names))

        projection = GeneratedProjection(
            class_ref=ClassRef(self.config.package_name_client, class_name),
            source_type=type_name,
            accessors=accessors,
            description=self._description(type_def),
        )
        return nested.merge(CodeGenResult(client_projections=[projection]))

    def _composite_accessor(
        self,
        field_def: FieldDefinitionNode,
        type_def: TypeNodeDefinition,
        used_names: set[str],
    ) -> GeneratedAccessor:
        field_name = field_def.name.value
        return GeneratedAccessor(
            name=self._accessor_name(field_name, used_names),
            field_name=field_name,
            kind=AccessorKind.COMPOSITE,
            sub_projection=ClassRef(
                self.config.package_name_client, projection_class_name(type_def.name.value)
            ),
            description=self._description(field_def),
        )

    def _leaf_accessor(self, field_def: FieldDefinitionNode, used_names: set[str]) -> GeneratedAccessor:
        field_name = field_def.name.value
        return GeneratedAccessor(
            name=self._accessor_name(field_name, used_names),
            field_name=field_name,
            kind=AccessorKind.LEAF,
            description=self._description(field_def),
        )

    @staticmethod
    def _accessor_name(field_name: str, used_names: set[str]) -> str:
        """Sanitize a field name and make it unique within one projection."""
        name = sanitize(field_name)
        while name in used_names:
            name = f"{name}_"
        used_names.add(name)
        return name

    @staticmethod
    def _description(node) -> str | None:
        description = getattr(node, "description", None)
        return description.value if description else None
