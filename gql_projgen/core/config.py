"""Configuration for a code generation run."""

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class Language(str, Enum):
    """Target language of the generated code."""
    PYTHON = "python"


class CodeGenConfig(BaseModel):
    """Settings for one code generation run.

    Example:
        config = CodeGenConfig(
            schemas=["type Query { people: [Person] } type Person { name: String }"],
            package_name="myapp.generated",
            include_fields={"Query": ["people"]},
        )
    """

    model_config = ConfigDict(extra="forbid")

    schemas: list[str] = Field(default_factory=list)
    schema_paths: list[Path] = Field(default_factory=list)
    package_name: str = "generated"
    sub_package_name_client: str = "client"
    sub_package_name_queries: str = "queries"
    # Owner type name -> field names to generate. A type that is not listed is not restricted.
    include_fields: dict[str, list[str]] = Field(default_factory=dict)
    language: Language = Language.PYTHON
    generate_client_api: bool = True

    @field_validator("package_name", "sub_package_name_client", "sub_package_name_queries")
    @classmethod
    def validate_package(cls, value: str) -> str:
        if not _PACKAGE_RE.match(value):
            raise ValueError(f"Invalid Python package name: {value!r}")
        return value

    @property
    def package_name_client(self) -> str:
        """Package that holds the generated projections."""
        return f"{self.package_name}.{self.sub_package_name_client}"

    @property
    def package_name_queries(self) -> str:
        """Package that holds the generated root entry point."""
        return f"{self.package_name}.{self.sub_package_name_queries}"

    @property
    def runs_client_api(self) -> bool:
        """Whether the projection generator should run for this configuration."""
        return self.generate_client_api and self.language is Language.PYTHON

    def included_fields_for(self, type_name: str) -> set[str] | None:
        """Return the allowed field names for a type, or None when it is unrestricted."""
        if type_name not in self.include_fields:
            return None
        return set(self.include_fields[type_name])

    @classmethod
    def from_file(cls, path: str | Path) -> "CodeGenConfig":
        """Load a configuration from a JSON file."""
        return cls.model_validate_json(Path(path).read_text())
