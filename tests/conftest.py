"""Shared fixtures for fieldcast tests."""

import pytest

from fieldcast import Fieldset, Schema, field


class Tag:
    """Item class for collection fields."""

    def __init__(self, label: str = ""):
        self.label = label


class Author:
    """Entity class; identity is its `id`."""

    def __init__(self, id: int | None = None):
        self.id = id


@pytest.fixture
def tag_class():
    return Tag


@pytest.fixture
def author_class():
    return Author


@pytest.fixture
def profile_fieldset():
    """Fieldset covering scalar, entity and collection fields."""
    return (
        Fieldset()
        .add("name", "text", required=True, max_length=50, label="Full name")
        .add("age", "integer", min=0, max=150)
        .add("email", "email", unique=True)
        .add("active", "boolean")
        .add("born", "date", nullable=True)
        .add("author", "entity", class_=Author, nullable=True)
        .add("tags", "collection", class_=Tag)
    )


@pytest.fixture
def row_fieldset():
    """Scalar-only fieldset for DataFrame validation."""
    return (
        Fieldset()
        .add("name", "text", required=True)
        .add("age", "integer", min=0, max=150)
        .add("email", "email")
        .add("active", "boolean", nullable=True)
    )


@pytest.fixture
def user_schema():
    """Declarative schema with a unique field and a collection."""

    class UserSchema(Schema):
        username = field("text", required=True, min_length=3, unique=True)
        email = field("email", required=True)
        score = field("integer", min=0, max=100)
        tags = field("collection", class_=Tag)

    return UserSchema
