"""Shared fixtures."""
import logging

import pytest

from structcheck import array, boolean, enum, number, obj, string
from structcheck.models import schema_loader


@pytest.fixture(autouse=True)
def _reset_structcheck_state():
    yield
    schema_loader.clear_cache()
    logger = logging.getLogger("structcheck")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def user_schema():
    return obj({
        "id": string(),
        "name": string(min_length=2, max_length=50),
        "email": string(),
        "age": number(minimum=0, maximum=120),
        "roles": array(enum("admin", "user", "guest")),
        "settings": obj({
            "notifications": boolean(),
            "theme": enum("light", "dark"),
        }),
    })


@pytest.fixture
def valid_user():
    return {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "name": "John Doe",
        "email": "john@example.com",
        "age": 30,
        "roles": ["user"],
        "settings": {"notifications": True, "theme": "dark"},
    }
