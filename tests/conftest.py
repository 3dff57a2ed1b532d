"""Shared fixtures for projection generator tests."""

import pytest

from gql_projgen.core.codegen import CodeGen
from gql_projgen.core.config import CodeGenConfig


PERSON_SCHEMA = """
type Query {
    people: [Person]
}

type Person {
    firstname: String
    lastname: String
    address: Address
}

type Address {
    street: String
    house: Int
}
"""


@pytest.fixture
def run_codegen():
    """Run one generation over an inline schema and return the CodeGenResult."""

    def _run(sdl: str, **config_kwargs):
        config = CodeGenConfig(schemas=[sdl], **config_kwargs)
        return CodeGen(config).generate()

    return _run


@pytest.fixture
def person_schema():
    return PERSON_SCHEMA
