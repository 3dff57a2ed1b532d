"""Core modules for GraphQL projection generation."""

from .codegen import CodeGen
from .config import CodeGenConfig, Language
from .field_filter import filter_fields, filter_included_in_config, filter_skipped
from .errors import CodeGenError, DuplicateClassError, TypeNameClashError
from .generator import CodeGenerator
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    AccessorKind,
    ClassRef,
    CodeGenResult,
    GeneratedAccessor,
    GeneratedProjection,
)
from .parser import SchemaParser
from .projection import BaseProjectionNode, build_query, dsl_context
from .projection_generator import ProjectionGenerator
from .sanitizer import sanitize
from .type_utils import find_root_type, find_type_definition

__all__ = [
    # Config
    "CodeGenConfig",
    "Language",
    # IR types
    "AccessorKind",
    "ClassRef",
    "CodeGenResult",
    "GeneratedAccessor",
    "GeneratedProjection",
    # Parser
    "SchemaParser",
    # Projection generation
    "CodeGen",
    "ProjectionGenerator",
    "filter_fields",
    "filter_included_in_config",
    "filter_skipped",
    "find_root_type",
    "find_type_definition",
    "sanitize",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # Code Generator
    "CodeGenerator",
    "CodeGenError",
    "DuplicateClassError",
    "TypeNameClashError",
    # Runtime
    "BaseProjectionNode",
    "build_query",
    "dsl_context",
]
