"""Intermediate Representation (IR) for generated projection code.

This module defines dataclasses that describe the classes to be generated
in a structural way: class names, base class, annotations and one accessor
per field. The renderer turns them into source text; nothing here knows
about templates.
"""

from dataclasses import dataclass, field
from enum import Enum

RUNTIME_MODULE = "gql_projgen.core.projection"


@dataclass(frozen=True)
class ClassRef:
    """Reference to a class in a package, e.g. generated.client.PersonProjection."""
    package: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


BASE_PROJECTION = ClassRef(RUNTIME_MODULE, "BaseProjectionNode")
DSL_CONTEXT = ClassRef(RUNTIME_MODULE, "dsl_context")


class AccessorKind(Enum):
    """Shape of a generated accessor method."""
    LEAF = "leaf"            # Selects a scalar field, no nesting
    COMPOSITE = "composite"  # Selects an object field and configures its sub-projection


@dataclass
class GeneratedAccessor:
    """Represents one accessor method of a generated projection."""
    name: str  # Sanitized Python identifier
    field_name: str  # GraphQL field name recorded in the selection
    kind: AccessorKind
    sub_projection: ClassRef | None = None
    description: str | None = None

    @property
    def is_composite(self) -> bool:
        return self.kind is AccessorKind.COMPOSITE

    @property
    def parameter_name(self) -> str | None:
        """Name of the configuration callback parameter, composite accessors only."""
        return "init_block" if self.is_composite else None


@dataclass
class GeneratedProjection:
    """Represents a generated projection class."""
    class_ref: ClassRef
    source_type: str
    accessors: list[GeneratedAccessor] = field(default_factory=list)
    description: str | None = None
    is_root: bool = False
    base_class: ClassRef = BASE_PROJECTION
    annotations: list[ClassRef] = field(default_factory=lambda: [DSL_CONTEXT])

    @property
    def name(self) -> str:
        return self.class_ref.name

    @property
    def package(self) -> str:
        return self.class_ref.package

    def get_accessor(self, name: str) -> GeneratedAccessor | None:
        """Look up an accessor by its generated name."""
        for accessor in self.accessors:
            if accessor.name == name:
                return accessor
        return None

    @property
    def leaf_accessors(self) -> list[GeneratedAccessor]:
        return [a for a in self.accessors if not a.is_composite]

    @property
    def composite_accessors(self) -> list[GeneratedAccessor]:
        return [a for a in self.accessors if a.is_composite]

    @property
    def referenced_classes(self) -> list[ClassRef]:
        """Sub-projection classes used by this projection, in accessor order, without repeats."""
        refs = []
        for accessor in self.composite_accessors:
            if accessor.sub_projection not in refs:
                refs.append(accessor.sub_projection)
        return refs


@dataclass
class CodeGenResult:
    """Output of one generation run.

    query_types holds the root entry point, client_projections every
    projection reachable from it. Results are combined with merge(), which
    concatenates and never removes duplicates.
    """
    query_types: list[GeneratedProjection] = field(default_factory=list)
    client_projections: list[GeneratedProjection] = field(default_factory=list)

    def merge(self, other: "CodeGenResult") -> "CodeGenResult":
        """Return a new result with other's artifacts appended to this one's."""
        return CodeGenResult(
            query_types=self.query_types + other.query_types,
            client_projections=self.client_projections + other.client_projections,
        )

    def is_empty(self) -> bool:
        return not self.query_types and not self.client_projections

    def get_projection(self, name: str) -> GeneratedProjection | None:
        """Look up a client projection by class name."""
        for projection in self.client_projections:
            if projection.name == name:
                return projection
        return None
