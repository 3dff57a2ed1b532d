"""Type reference resolution against a parsed schema document."""

import logging

from graphql import (
    DocumentNode,
    FieldDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NameNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeDefinitionNode,
    TypeExtensionNode,
    TypeNode,
)

logger = logging.getLogger(__name__)

BASE_TYPES = {"String", "Int", "Float", "Boolean", "ID"}

DEFAULT_ROOT_TYPES = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}

TypeNodeDefinition = TypeDefinitionNode | TypeExtensionNode


def unwrap_type_name(type_node: TypeNode) -> str:
    """Strip list and non-null wrappers, e.g. [Person!]! -> Person."""
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    if not isinstance(type_node, NamedTypeNode):
        raise TypeError(f"Expected NamedTypeNode, got {type(type_node).__name__}")
    return type_node.name.value


def is_base_type(type_name: str) -> bool:
    """Check if a type name is one of the built-in GraphQL scalars."""
    return type_name in BASE_TYPES


def find_type_definition(
    type_node: TypeNode,
    document: DocumentNode,
    exclude_extensions: bool = False,
    include_base_types: bool = False,
    include_scalar_types: bool = False,
) -> TypeNodeDefinition | None:
    """Find the definition a (possibly wrapped) type reference points to.

    Args:
        type_node: The field's declared type
        document: The schema document to search
        exclude_extensions: Never return 'extend type' nodes
        include_base_types: Return a synthetic scalar definition for built-in scalars
        include_scalar_types: Let scalar definitions in the document match

    Returns:
        The first matching definition in document order, or None for leaves
    """
    type_name = unwrap_type_name(type_node)

    if include_base_types and is_base_type(type_name):
        return ScalarTypeDefinitionNode(name=NameNode(value=type_name))

    for definition in document.definitions:
        if isinstance(definition, (ScalarTypeDefinitionNode, ScalarTypeExtensionNode)):
            if include_scalar_types and definition.name.value == type_name:
                return definition
        elif isinstance(definition, TypeDefinitionNode):
            if definition.name.value == type_name:
                return definition
        elif isinstance(definition, TypeExtensionNode):
            if not exclude_extensions and definition.name.value == type_name:
                return definition
    return None


def is_projectable(definition: TypeNodeDefinition | None) -> bool:
    """Check if a definition has fields that can be selected into a projection."""
    return isinstance(
        definition,
        (
            ObjectTypeDefinitionNode,
            ObjectTypeExtensionNode,
            InterfaceTypeDefinitionNode,
            InterfaceTypeExtensionNode,
        ),
    )


def merged_field_definitions(
    type_def: TypeNodeDefinition, document: DocumentNode
) -> list[FieldDefinitionNode]:
    """Return a type's fields followed by the fields of its 'extend type' definitions.

    A field name seen earlier wins over a later one with the same name.
    """
    type_name = type_def.name.value
    candidates = list(getattr(type_def, "fields", None) or [])
    for definition in document.definitions:
        if definition is type_def:
            continue
        if isinstance(definition, ObjectTypeExtensionNode) and definition.name.value == type_name:
            candidates.extend(definition.fields or [])

    fields = []
    existing_names: set[str] = set()
    for field_def in candidates:
        if field_def.name.value in existing_names:
            logger.debug("Ignoring duplicate field %s.%s", type_name, field_def.name.value)
            continue
        existing_names.add(field_def.name.value)
        fields.append(field_def)
    return fields


def find_root_type_name(document: DocumentNode, operation: str = "query") -> str:
    """Return the name of the root type for an operation.

    Honours 'schema { query: RootQuery }' definitions and extensions,
    falling back to the conventional names (Query, Mutation, Subscription).
    """
    for definition in document.definitions:
        if isinstance(definition, (SchemaDefinitionNode, SchemaExtensionNode)):
            for op_type in definition.operation_types or []:
                if op_type.operation.value == operation:
                    return op_type.type.name.value
    return DEFAULT_ROOT_TYPES[operation]


def find_root_type(
    document: DocumentNode, operation: str = "query"
) -> ObjectTypeDefinitionNode | ObjectTypeExtensionNode | None:
    """Find the root type definition for an operation.

    A schema that only declares 'extend type Query { ... }' gets its first
    extension back, so its fields still produce an entry point.
    """
    root_name = find_root_type_name(document, operation)
    extension = None
    for definition in document.definitions:
        if isinstance(definition, ObjectTypeDefinitionNode) and definition.name.value == root_name:
            return definition
        if (
            extension is None
            and isinstance(definition, ObjectTypeExtensionNode)
            and definition.name.value == root_name
        ):
            extension = definition
    return extension
