"""Errors raised while building or rendering projections."""


class CodeGenError(Exception):
    """Raised when the generated code would be unusable."""


class DuplicateClassError(CodeGenError):
    """Raised when two generated classes end up with the same name in one package."""

    def __init__(self, package: str, class_name: str, message: str | None = None):
        self.package = package
        self.class_name = class_name
        super().__init__(message or f"Class {class_name} is generated twice in package {package}")


class TypeNameClashError(DuplicateClassError):
    """Raised when two schema types map to the same projection class, e.g. person and Person."""

    def __init__(self, package: str, class_name: str, type_names: tuple[str, str]):
        self.type_names = type_names
        first, second = type_names
        super().__init__(
            package,
            class_name,
            f"Types {first} and {second} both generate {class_name} in package {package}",
        )
