"""Reserved identifier handling for generated Python code."""

# Python reserved keywords that cannot be used as class or method names
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}

# Members of BaseProjectionNode that a generated accessor must not shadow
PROJECTION_MEMBERS = {'fields', 'serialize'}

# Names the accessor signatures evaluate in the class body of a generated projection
ANNOTATION_NAMES = {'Any', 'Callable'}

RESERVED_WORDS = PYTHON_KEYWORDS | PROJECTION_MEMBERS | ANNOTATION_NAMES


def sanitize(name: str) -> str:
    """Make an identifier safe for generated code by suffixing reserved words with underscore.

    None of the reserved words ends with an underscore, so applying this
    twice gives the same result as applying it once.
    """
    if name in RESERVED_WORDS:
        return f"{name}_"
    return name
