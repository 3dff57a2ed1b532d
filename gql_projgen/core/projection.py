"""Runtime support for generated projection classes.

Generated modules import from here:

    from gql_projgen.core.projection import BaseProjectionNode, dsl_context

A projection records the fields selected on it in ``fields``. Leaf fields map
to ``None``, nested fields map to the sub-projection that was configured for
them. ``serialize()`` turns the recorded tree into a GraphQL selection set.
"""

from typing import Optional


def dsl_context(cls):
    """Mark a class as a projection DSL scope."""
    cls.__dsl_context__ = True
    return cls


class BaseProjectionNode:
    """Base class of every generated projection."""

    def __init__(self):
        self.fields: dict[str, Optional["BaseProjectionNode"]] = {}

    def serialize(self) -> str:
        """Render the selected fields as a selection set.

        Example:
            >>> PersonProjection().firstname().serialize()
            '{ firstname }'
        """
        parts = []
        for field_name, projection in self.fields.items():
            if projection is None:
                parts.append(field_name)
            elif projection.fields:
                parts.append(f"{field_name} {projection.serialize()}")
            else:
                # Nothing selected below, ask for the type name so the query stays valid
                parts.append(f"{field_name} {{ __typename }}")
        if not parts:
            return "{ __typename }"
        return "{ " + " ".join(parts) + " }"

    def __repr__(self):
        return f"{type(self).__name__}({self.serialize()})"


def build_query(
    projection: BaseProjectionNode,
    operation: str = "query",
    name: str | None = None,
) -> str:
    """Build a complete operation string from a root projection.

    Args:
        projection: The configured root projection (e.g. QueryProjection)
        operation: Operation keyword, 'query' by default
        name: Optional operation name

    Returns:
        GraphQL document text, e.g. ``query People { people { firstname } }``
    """
    header = f"{operation} {name}" if name else operation
    return f"{header} {projection.serialize()}"
