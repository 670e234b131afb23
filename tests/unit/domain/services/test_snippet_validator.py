"""Unit tests for snippet payload and query validation."""

import pytest

from codecollab.domain.exceptions import ValidationError
from codecollab.domain.services.snippet_validator import (
    MAX_TAGS,
    validate_snippet_create,
    validate_snippet_query,
    validate_snippet_update,
)

VALID_SNIPPET = {
    "title": "Quick sort",
    "description": "A short recursive quick sort.",
    "content": "def qs(xs): ...",
    "language": "python",
    "tags": ["sorting", "recursion"],
}


def _fields(exc: ValidationError) -> set[str]:
    return {d.field for d in exc.details}


class TestValidateSnippetCreate:
    """Tests for validate_snippet_create."""

    def test_valid_snippet(self):
        result = validate_snippet_create(VALID_SNIPPET)

        assert result.title == "Quick sort"
        assert result.language == "python"
        assert result.tags == ["sorting", "recursion"]
        assert result.is_public is True

    def test_defaults(self):
        result = validate_snippet_create(
            {"title": "Hello", "content": "print(1)", "language": "Python"}
        )

        assert result.description is None
        assert result.tags == []
        assert result.language == "python"

    def test_is_public_alias(self):
        result = validate_snippet_create({**VALID_SNIPPET, "isPublic": False})

        assert result.is_public is False

    def test_blank_description_becomes_none(self):
        result = validate_snippet_create({**VALID_SNIPPET, "description": "   "})

        assert result.description is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("title", "ab"),
            ("title", "t" * 201),
            ("description", "too short"),
            ("description", "d" * 1001),
            ("content", "x=1"),
            ("content", "c" * 50001),
            ("language", "cobol"),
            ("tags", ["has space"]),
            ("tags", ["t" * 31]),
            ("tags", ["dup", "dup"]),
        ],
    )
    def test_rejects_out_of_range_field(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_snippet_create({**VALID_SNIPPET, field: value})

        assert field in _fields(exc_info.value)

    def test_duplicate_tags_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_snippet_create({**VALID_SNIPPET, "tags": ["a", "a"]})

        assert exc_info.value.details[0].message == "Tags must be unique"

    def test_tags_truncated_to_maximum(self):
        tags = [f"tag{i}" for i in range(MAX_TAGS + 3)]

        result = validate_snippet_create({**VALID_SNIPPET, "tags": tags})

        assert result.tags == tags[:MAX_TAGS]

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_snippet_create({})

        assert _fields(exc_info.value) == {"title", "content", "language"}


class TestValidateSnippetUpdate:
    """Tests for validate_snippet_update."""

    def test_only_supplied_fields_are_changes(self):
        result = validate_snippet_update({"title": "  New title "})

        assert result.changes() == {"title": "New title"}

    def test_empty_update(self):
        assert validate_snippet_update({}).changes() == {}

    def test_description_can_be_cleared(self):
        result = validate_snippet_update({"description": None})

        assert result.changes() == {"description": None}

    def test_is_public_alias_maps_to_attribute(self):
        assert validate_snippet_update({"isPublic": False}).changes() == {"is_public": False}

    @pytest.mark.parametrize("field", ["title", "content", "language", "tags"])
    def test_null_rejected(self, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_snippet_update({field: None})

        assert exc_info.value.details[0].message == "Field cannot be null"

    def test_fields_validated_like_create(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_snippet_update({"language": "cobol"})

        assert _fields(exc_info.value) == {"language"}


class TestValidateSnippetQuery:
    """Tests for validate_snippet_query."""

    def test_defaults(self):
        query = validate_snippet_query({})

        assert query.page == 1
        assert query.limit == 20
        assert query.sort_by == "created"
        assert query.sort_order == "desc"
        assert query.offset == 0

    def test_string_params_are_coerced(self):
        query = validate_snippet_query(
            {"page": "3", "limit": "10", "sortBy": "views", "sortOrder": "asc"}
        )

        assert query.page == 3
        assert query.limit == 10
        assert query.offset == 20
        assert query.sort_by == "views"
        assert query.sort_order == "asc"

    @pytest.mark.parametrize(
        "params",
        [
            {"page": "0"},
            {"limit": "0"},
            {"limit": "101"},
            {"sortBy": "random"},
            {"sortOrder": "sideways"},
            {"language": "cobol"},
            {"search": "s" * 101},
        ],
    )
    def test_rejects_bad_params(self, params):
        with pytest.raises(ValidationError):
            validate_snippet_query(params)

    def test_filters_are_normalized(self):
        query = validate_snippet_query({"language": "Go", "search": "  sort "})

        assert query.language == "go"
        assert query.search == "sort"
