"""
Tests for record instances.

These tests verify:
    - Positional construction and arity
    - Indexed and named access, including soft misses
    - Instance widening through unknown names
    - Collection operations (each, each_pair, dig, select, ...)
    - Structural equality
"""

import pytest

from structkit import ArityError, create


@pytest.fixture
def person_type():
    return create("name", "age")


@pytest.fixture
def person(person_type):
    return person_type("Ann", 30)


class TestConstruction:
    """Test positional construction."""

    def test_all_values(self, person):
        """Should store values in field order."""
        assert person.to_list() == ["Ann", 30]

    def test_missing_values_default_to_none(self, person_type):
        """Should pad missing trailing fields with None."""
        assert person_type("Ann").to_list() == ["Ann", None]
        assert person_type().to_list() == [None, None]

    def test_too_many_values(self, person_type):
        """Should raise ArityError when given more values than fields."""
        with pytest.raises(ArityError) as excinfo:
            person_type("Ann", 30, "extra")
        assert excinfo.value.expected == 2
        assert excinfo.value.given == 3

    def test_arity_error_is_type_error(self, person_type):
        """Should be catchable as a TypeError."""
        with pytest.raises(TypeError):
            person_type(1, 2, 3)

    def test_empty_shape(self):
        """Should allow a type with no fields."""
        empty = create()
        assert empty().size() == 0
        with pytest.raises(ArityError):
            empty(1)

    @pytest.mark.parametrize("values", [(), (1,), (1, 2), (1, 2, 3)])
    def test_to_list_is_padded_values(self, values):
        """Should equal the given values padded with None."""
        record_type = create("a", "b", "c")
        expected = list(values) + [None] * (3 - len(values))
        assert record_type(*values).to_list() == expected


class TestIndexedAccess:
    """Test get/set and the [] operators."""

    def test_get_by_name(self, person):
        """Should return the value of a named field."""
        assert person.get("name") == "Ann"
        assert person["age"] == 30

    def test_get_by_position(self, person):
        """Should return the value at a position."""
        assert person.get(0) == "Ann"
        assert person[1] == 30

    def test_get_negative_position(self, person):
        """Should count negative positions from the end."""
        assert person[-1] == 30

    def test_get_out_of_range(self, person):
        """Should return None for an out-of-range position."""
        assert person[5] is None
        assert person[-3] is None

    def test_get_unknown_name(self, person):
        """Should return None for an unknown name."""
        assert person["email"] is None

    def test_set_by_name(self, person):
        """Should overwrite a named field."""
        person["age"] = 31
        assert person.age == 31

    def test_set_by_position(self, person):
        """Should overwrite the field at a position."""
        person.set(0, "Bob")
        assert person["name"] == "Bob"

    def test_set_out_of_range_is_ignored(self, person):
        """Should write nothing for an out-of-range position."""
        person[7] = "ignored"
        assert person.to_list() == ["Ann", 30]
        assert person.size() == 2

    def test_named_accessors(self, person):
        """Should expose declared fields as attributes."""
        assert person.name == "Ann"
        person.name = "Cat"
        assert person[0] == "Cat"

    def test_non_string_name_key(self):
        """Should look up non-integer keys by their string form."""
        record_type = create("1.5", "b")
        record = record_type("x", "y")
        assert record[1.5] == "x"

    def test_get_and_values_at_agree(self, person):
        """Should return the same value for every valid position."""
        for index in range(person.size()):
            assert person.get(index) == person.values_at(index)[0]


class TestWidening:
    """Test writes to names outside the declared shape."""

    def test_unknown_name_adds_slot(self, person):
        """Should append a new slot to the instance."""
        person["email"] = "ann@example.com"
        assert person.members() == ["name", "age", "email"]
        assert person.size() == 3
        assert person[2] == "ann@example.com"

    def test_shape_is_unchanged(self, person_type, person):
        """Should leave the type's declared shape untouched."""
        person["email"] = "ann@example.com"
        assert person_type.shape() == ["name", "age"]
        assert person_type("Bob").members() == ["name", "age"]

    def test_existing_name_does_not_widen(self, person):
        """Should not change size when writing a declared field."""
        person["name"] = "Bob"
        assert person.size() == 2


class TestCollectionOperations:
    """Test Struct-style collection operations."""

    def test_each(self, person):
        """Should visit values in order and return the results."""
        seen = []
        result = person.each(lambda value: seen.append(value) or str(value))
        assert seen == ["Ann", 30]
        assert result == ["Ann", "30"]

    def test_each_pair(self, person):
        """Should visit (name, value) pairs in order."""
        assert person.each_pair(lambda name, value: (name, value)) == [("name", "Ann"), ("age", 30)]

    def test_size_and_length(self, person):
        """Should count fields."""
        assert person.size() == 2
        assert person.length() == 2
        assert len(person) == 2

    def test_members(self, person):
        """Should list field names in order."""
        assert person.members() == ["name", "age"]

    def test_select(self, person_type):
        """Should keep matching values and drop None."""
        record = create("a", "b", "c", "d")(1, None, 3, 4)
        assert record.select(lambda value: value != 3) == [1, 4]
        assert record.select(lambda value: True) == [1, 3, 4]

    def test_select_excludes_absent_fields(self, person_type):
        """Should leave unset fields out."""
        assert person_type("Ann").select(lambda value: value is not None) == ["Ann"]

    def test_to_a_alias(self, person):
        """Should offer to_a as an alias of to_list."""
        assert person.to_a() == person.to_list()

    def test_values_at(self, person):
        """Should pick values by position, None when out of range."""
        assert person.values_at(1, 0, 9) == [30, "Ann", None]
        assert person.values_at() == []

    def test_iteration(self, person):
        """Should iterate over values."""
        assert list(person) == ["Ann", 30]

    def test_repr(self, person):
        """Should render the type name and fields."""
        assert repr(person) == "AnonymousRecord(name='Ann', age=30)"


class TestDig:
    """Test nested lookups."""

    def test_single_level(self, person):
        """Should return the field value when no path remains."""
        assert person.dig("name") == "Ann"

    def test_nested_record(self):
        """Should descend into a nested record."""
        inner_type = create("inner")
        outer_type = create("nested")
        outer = outer_type(inner_type("value"))
        assert outer.dig("nested", "inner") == "value"

    def test_nested_mapping_and_sequence(self):
        """Should descend into mappings and sequences."""
        record = create("nested")({"items": [10, 20, {"deep": True}]})
        assert record.dig("nested", "items", 1) == 20
        assert record.dig("nested", "items", 2, "deep") is True

    def test_absent_first_level(self, person_type):
        """Should return None when the first lookup misses."""
        assert person_type().dig("name", "anything") is None
        assert person_type().dig("missing") is None

    def test_non_diggable_intermediate(self, person):
        """Should return None when a value cannot be traversed."""
        assert person.dig("age", "x") is None
        assert person.dig("name", 0) is None

    def test_missing_nested_key(self):
        """Should return None for a missing key deeper in the path."""
        record = create("nested")({"a": {}})
        assert record.dig("nested", "a", "b", "c") is None

    def test_unhashable_key_in_mapping(self):
        """Should return None instead of raising for an unhashable key."""
        record = create("nested")({"a": 1})
        assert record.dig("nested", ["a"]) is None


class TestEquality:
    """Test structural equality."""

    def test_reflexive(self, person):
        """Should equal itself."""
        assert person.equals(person)
        assert person == person

    def test_same_values(self, person_type):
        """Should equal another instance with the same values."""
        assert person_type("Ann", 30) == person_type("Ann", 30)
        assert person_type("Ann", 30).equals(person_type("Ann", 30))

    def test_different_values(self, person_type):
        """Should differ when any value differs."""
        assert person_type("Ann", 30) != person_type("Ann", 31)

    def test_same_shape_different_type(self, person_type):
        """Should not equal an instance of another type with the same fields."""
        twin_type = create("name", "age")
        assert not person_type("Ann", 30).equals(twin_type("Ann", 30))
        assert person_type("Ann", 30) != twin_type("Ann", 30)

    def test_other_objects(self, person):
        """Should not equal non-record values."""
        assert person != ["Ann", 30]
        assert not person.equals(("Ann", 30))

    def test_widened_instance(self, person_type):
        """Should not equal an instance without the extra slot."""
        widened = person_type("Ann", 30)
        widened["email"] = "a@b.c"
        plain = person_type("Ann", 30)
        assert widened != plain
        assert plain != widened

    def test_unhashable(self, person):
        """Should not be hashable."""
        with pytest.raises(TypeError):
            hash(person)
