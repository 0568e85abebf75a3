"""Tests for field definitions, the validate pipeline and casting."""

import pytest

from fieldcast import (
    MISSING,
    ConfigurationError,
    Constant,
    Deferred,
    ErrorKind,
    Field,
    FieldType,
)


class TestFieldConstruction:
    """Test metadata extraction and configuration errors."""

    def test_metadata_defaults(self):
        """Metadata flags default to False and the label to the name."""
        field = Field("title")
        assert field.type is FieldType.TEXT
        assert field.required is False
        assert field.nullable is False
        assert field.unique is False
        assert field.readonly is False
        assert field.guarded is False
        assert field.label == "title"

    def test_type_from_string(self):
        assert Field("age", "integer").type is FieldType.INTEGER
        assert Field("age", "INTEGER").type is FieldType.INTEGER

    def test_unknown_type_raises(self):
        with pytest.raises(ConfigurationError, match="unknown type 'money'"):
            Field("price", "money")

    def test_rules_exclude_metadata(self):
        """Metadata keys are extracted; only constraints remain in rules."""
        field = Field("age", "integer", {"required": True, "min": 0}, max=10, label="Age")
        assert field.required is True
        assert field.label == "Age"
        assert dict(field.rules) == {"min": 0, "max": 10}

    def test_rules_are_read_only(self):
        field = Field("age", "integer", min=0)
        with pytest.raises(TypeError):
            field.rules["min"] = 5  # type: ignore[index]

    def test_class_alias(self, tag_class):
        field = Field("tags", "collection", class_=tag_class)
        assert field.rules["class"] is tag_class

    @pytest.mark.parametrize("field_type", ["object", "entity", "collection"])
    def test_composite_fields_require_class(self, field_type):
        """Missing class is a construction-time error."""
        with pytest.raises(ConfigurationError, match="Missing class"):
            Field("related", field_type)

    def test_class_must_be_a_type(self):
        with pytest.raises(ConfigurationError, match="must be a class"):
            Field("related", "object", {"class": "Tag"})

    def test_invalid_regex_raises(self):
        with pytest.raises(ConfigurationError, match="invalid regex"):
            Field("code", regex="[A-Z")

    def test_values_must_be_a_collection(self):
        with pytest.raises(ConfigurationError, match="'values' must be a collection"):
            Field("colour", values="red")

    @pytest.mark.parametrize("field_type", ["entity", "collection"])
    def test_instantiated_classes_must_be_single(
        self, field_type, tag_class, author_class
    ):
        with pytest.raises(ConfigurationError, match="take a single class"):
            Field("related", field_type, class_=(tag_class, author_class))

    def test_object_accepts_tuple_of_classes(self, tag_class, author_class):
        field = Field("related", "object", class_=(tag_class, author_class))
        assert field.validate(author_class())[1] is ErrorKind.NONE
        assert field.default is None

    def test_container_must_be_callable(self, tag_class):
        with pytest.raises(ConfigurationError, match="'container' must be callable"):
            Field("tags", "collection", class_=tag_class, container="list")

    def test_object_fields_are_nullable_by_default(self, tag_class):
        field = Field("tag", "object", class_=tag_class)
        assert field.nullable is True
        assert field.default is None

    def test_object_nullable_can_be_overridden(self, tag_class):
        field = Field("tag", "object", class_=tag_class, nullable=False)
        assert field.nullable is False

    def test_repr(self):
        assert repr(Field("age", "integer")) == "Field('age', 'integer')"


class TestFieldAccessor:
    """Test the explicit get() accessor."""

    def test_attributes_before_rules(self):
        field = Field("age", "integer", required=True, max=99)
        assert field.get("required") is True
        assert field.get("type") is FieldType.INTEGER
        assert field.get("max") == 99

    def test_missing_key(self):
        field = Field("age", "integer")
        assert field.get("max") is MISSING
        assert field.get("max", None) is None

    def test_default_is_resolved(self):
        field = Field("age", "integer", default="7")
        assert field.get("default") == 7


class TestValidatePipeline:
    """Test the required → null → type → rules sequence."""

    @pytest.mark.parametrize("value", [None, "", "   ", 0])
    def test_required_short_circuits(self, value):
        """Empty required values yield REQUIRED whatever the other rules."""
        field = Field("n", "integer", required=True, nullable=False, min=5)
        assert field.validate(value) == (value, ErrorKind.REQUIRED)

    def test_null_rejected_when_not_nullable(self):
        assert Field("n").validate(None) == (None, ErrorKind.NULL)

    def test_null_coerced_when_nullable(self):
        assert Field("n", nullable=True).validate(None) == ("", ErrorKind.NONE)

    def test_text_is_trimmed(self):
        assert Field("n").validate("  Ada  ") == ("Ada", ErrorKind.NONE)

    def test_type_failure_keeps_raw_value(self):
        assert Field("n", "integer").validate("abc") == ("abc", ErrorKind.INVALID_INTEGER)
        assert Field("n", "email").validate("nope") == ("nope", ErrorKind.INVALID_EMAIL)
        assert Field("n", "float").validate("x") == ("x", ErrorKind.INVALID_FLOAT)

    def test_malformed_raw_input_is_a_type_error(self):
        """Inputs the coercion cannot read are reported, never raised."""
        assert Field("f", "float").validate("e5") == ("e5", ErrorKind.INVALID_FLOAT)
        assert Field("n", "integer").validate(b"\xff") == (
            b"\xff",
            ErrorKind.INVALID_INTEGER,
        )
        assert Field("n", "ip").validate(b"\xff") == (b"\xff", ErrorKind.INVALID_IP)
        assert Field("n", "timestamp").validate(b"\xff") == (
            b"\xff",
            ErrorKind.INVALID_TIMESTAMP,
        )

    def test_boolean_false_is_valid(self):
        assert Field("b", "boolean").validate(False) == (False, ErrorKind.NONE)
        assert Field("b", "boolean").validate("off") == (False, ErrorKind.NONE)

    def test_boolean_failure(self):
        assert Field("b", "boolean").validate("maybe") == ("maybe", ErrorKind.BOOLEAN)

    def test_zero_date_is_no_value(self):
        assert Field("d", "date").validate("0000-00-00") == ("", ErrorKind.NONE)
        assert Field("d", "datetime").validate("0000-00-00 00:00:00") == (
            "",
            ErrorKind.NONE,
        )
        assert Field("t", "time").validate("00:00:00") == ("", ErrorKind.NONE)

    def test_year_yields_flag_not_year(self):
        """Year validation never produces a usable coerced year, only True."""
        field = Field("y", "year")
        assert field.validate("1999") == (True, ErrorKind.NONE)
        assert field.validate("1800") == ("1800", ErrorKind.INVALID_YEAR)

    def test_object_fields(self, tag_class):
        field = Field("tag", "object", class_=tag_class)
        tag = tag_class()
        assert field.validate(tag) == (tag, ErrorKind.NONE)
        assert field.validate(None) == (None, ErrorKind.NONE)
        assert field.validate("tag") == ("tag", ErrorKind.INVALID_OBJECT)

    def test_entity_fields(self, author_class):
        field = Field("author", "entity", class_=author_class)
        assert field.validate(None) == (None, ErrorKind.NULL)
        assert field.validate(42) == (42, ErrorKind.INVALID_ENTITY)

    def test_required_entity_needs_identity(self, author_class):
        field = Field("author", "entity", class_=author_class, required=True)
        unsaved = author_class()
        assert field.validate(unsaved) == (unsaved, ErrorKind.REQUIRED)
        saved = author_class(id=3)
        assert field.validate(saved) == (saved, ErrorKind.NONE)


class TestRules:
    """Test the range, length, values and regex rules."""

    def test_range_is_boundary_inclusive(self):
        field = Field("n", "integer", min=10, max=20)
        assert field.validate(10) == (10, ErrorKind.NONE)
        assert field.validate(20) == (20, ErrorKind.NONE)
        assert field.validate(9) == (9, ErrorKind.MIN)
        assert field.validate("21") == (21, ErrorKind.MAX)

    def test_falsy_values_skip_range(self):
        """0 never triggers MIN, even below the minimum."""
        assert Field("n", "integer", min=5).validate(0) == (0, ErrorKind.NONE)

    def test_coerced_value_is_range_checked(self):
        field = Field("score", "integer", min=0, max=100)
        assert field.validate("150") == (150, ErrorKind.MAX)

    def test_length_counts_characters(self):
        """Multi-byte characters count once."""
        field = Field("n", min_length=2, max_length=3)
        assert field.validate("héé") == ("héé", ErrorKind.NONE)
        assert field.validate("héé!") == ("héé!", ErrorKind.TOO_LONG)
        assert field.validate("é") == ("é", ErrorKind.TOO_SHORT)

    def test_values_allow_list(self):
        field = Field("colour", values=["red", "green"])
        assert field.validate(" red ") == ("red", ErrorKind.NONE)
        assert field.validate("blue") == ("blue", ErrorKind.VALUE)

    def test_regex(self):
        field = Field("code", regex=r"^[A-Z]{3}$")
        assert field.validate("ABC") == ("ABC", ErrorKind.NONE)
        assert field.validate("abc") == ("abc", ErrorKind.REGEX)

    def test_rule_order(self):
        """Only the first failing rule (range, length, values, regex) is reported."""
        assert Field("n", "integer", max=5, max_length=1).validate("10") == (
            10,
            ErrorKind.MAX,
        )
        assert Field("c", max_length=1, values=["a"]).validate("bb") == (
            "bb",
            ErrorKind.TOO_LONG,
        )
        assert Field("c", values=["a"], regex="^b$").validate("c") == (
            "c",
            ErrorKind.VALUE,
        )

    def test_unorderable_value_fails_range(self):
        assert Field("n", "text", min=5).validate("abc") == ("abc", ErrorKind.MIN)


class TestCast:
    """Test best-effort casting."""

    def test_integer_like_types(self):
        field = Field("n", "integer")
        assert field.cast("42") == 42
        assert field.cast("12abc") == 12
        assert field.cast("") == 0
        assert field.cast(None) == 0
        assert field.cast(3.9) == 3
        assert Field("t", "timestamp").cast("1700000000") == 1700000000
        assert Field("y", "year").cast("1999") == 1999

    def test_float(self):
        field = Field("f", "float")
        assert field.cast("3.5kg") == 3.5
        assert field.cast("") == 0.0

    def test_boolean(self):
        field = Field("b", "boolean")
        assert field.cast("false") is False
        assert field.cast("0") is False
        assert field.cast("yes") is True
        assert field.cast("") is False
        assert field.cast(1) is True

    def test_zero_dates(self):
        assert Field("d", "date").cast("0000-00-00") == ""
        assert Field("d", "datetime").cast("0000-00-00 00:00:00") == ""
        assert Field("d", "date").cast("2024-01-01") == "2024-01-01"

    def test_json(self):
        field = Field("j", "json")
        assert field.cast("") == {}
        assert field.cast(None) == {}
        assert field.cast('{"a": 1}') == {"a": 1}
        assert field.cast("[1]") == [1]
        assert field.cast("not json") == "not json"
        data = {"a": 1}
        assert field.cast(data) is data

    def test_other_types_pass_through(self):
        assert Field("t").cast(" x ") == " x "


class TestDefaults:
    """Test default resolution."""

    @pytest.mark.parametrize(
        ("field_type", "expected"),
        [
            ("text", ""),
            ("integer", 0),
            ("float", 0.0),
            ("boolean", False),
            ("json", {}),
            ("date", ""),
        ],
    )
    def test_scalar_defaults_are_cast(self, field_type, expected):
        assert Field("x", field_type).default == expected

    def test_explicit_default_is_cast(self):
        assert Field("n", "integer", default="5").default == 5
        assert isinstance(Field("n", "integer", default="5").default_spec, Constant)

    def test_collection_defaults_are_not_aliased(self, tag_class):
        field = Field("tags", "collection", class_=tag_class)
        first, second = field.default, field.default
        assert first == [] and second == []
        assert first is not second
        assert isinstance(field.default_spec, Deferred)

    def test_collection_container(self, tag_class):
        class TagList(list):
            def __init__(self, item_class):
                super().__init__()
                self.item_class = item_class

        field = Field("tags", "collection", class_=tag_class, container=TagList)
        value = field.default
        assert isinstance(value, TagList)
        assert value.item_class is tag_class
        assert field.default is not value

    def test_explicit_collection_default_is_copied(self, tag_class):
        field = Field("tags", "collection", class_=tag_class, default=[tag_class()])
        first, second = field.default, field.default
        assert len(first) == 1
        assert first is not second
        assert isinstance(field.default_spec, Deferred)

    def test_explicit_entity_default_is_copied(self, author_class):
        field = Field(
            "author", "entity", class_=author_class, default=author_class(id=1)
        )
        first, second = field.default, field.default
        assert first.id == second.id == 1
        assert first is not second

    def test_constant_wrapped_composite_default_is_copied(self, tag_class):
        field = Field("tags", "collection", class_=tag_class, default=Constant([]))
        assert field.default is not field.default

    def test_entity_default_is_fresh_instance(self, author_class):
        field = Field("author", "entity", class_=author_class)
        first, second = field.default, field.default
        assert isinstance(first, author_class)
        assert first is not second

    def test_deferred_default_runs_each_time(self):
        calls = []
        field = Field("n", "integer", default=Deferred(lambda: calls.append(1) or len(calls)))
        assert field.default == 1
        assert field.default == 2


class TestFieldHelpers:
    """Test type predicates and serialisation."""

    def test_type_predicates(self, tag_class):
        assert Field("n", "float").is_numeric()
        assert Field("d", "year").is_temporal()
        assert Field("e", "email").is_text()
        assert Field("o", "object", class_=tag_class).is_object()
        assert Field("o", "entity", class_=tag_class).is_object()
        assert Field("c", "collection", class_=tag_class).is_collection()
        assert not Field("t").is_numeric()

    def test_to_dict(self):
        data = Field("age", "integer", required=True, min=0, default=3).to_dict()
        assert data["name"] == "age"
        assert data["type"] == "integer"
        assert data["required"] is True
        assert data["default"] == Constant(3)
        assert data["rules"] == {"min": 0}
