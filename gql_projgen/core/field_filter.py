"""Field inclusion and skip policies applied before projection generation."""

from graphql import FieldDefinitionNode

from .config import CodeGenConfig

SKIP_DIRECTIVE = "skipcodegen"


def is_skipped(field_def: FieldDefinitionNode) -> bool:
    """Check if a field carries the @skipcodegen directive."""
    return any(d.name.value == SKIP_DIRECTIVE for d in field_def.directives or [])


def filter_skipped(fields: list[FieldDefinitionNode]) -> list[FieldDefinitionNode]:
    """Drop fields marked with @skipcodegen."""
    return [f for f in fields if not is_skipped(f)]


def filter_included_in_config(
    fields: list[FieldDefinitionNode],
    owner_type_name: str,
    config: CodeGenConfig,
) -> list[FieldDefinitionNode]:
    """Keep only the fields the config allows for the owner type.

    Types without an entry in config.include_fields are not restricted;
    an empty entry keeps nothing.
    """
    allowed = config.included_fields_for(owner_type_name)
    if allowed is None:
        return list(fields)
    return [f for f in fields if f.name.value in allowed]


def filter_fields(
    fields: list[FieldDefinitionNode],
    owner_type_name: str,
    config: CodeGenConfig,
) -> list[FieldDefinitionNode]:
    """Apply the inclusion policy, then the skip policy. Order is preserved."""
    return filter_skipped(filter_included_in_config(fields, owner_type_name, config))
