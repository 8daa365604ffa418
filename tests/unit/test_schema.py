"""Tests for schema declarations and rule shape checks."""

import pytest

from neo_docmodels.core.exceptions import ConfigurationError, RuleDeclarationError
from neo_docmodels.models import BaseModel, ModelSchema, SchemaProvider, check_rule


class TestModelSchema:
    """Test the static schema descriptor."""

    def test_empty_schema(self):
        schema = ModelSchema()
        assert schema.attributes_list() == []
        assert schema.default_values() == {}
        assert schema.rules() == []
        assert schema.unsafe_attributes_list() == []
        assert schema.filters() == {}

    def test_schema_is_a_provider(self):
        assert isinstance(ModelSchema(), SchemaProvider)

    def test_returns_copies(self):
        schema = ModelSchema(attributes=("a", "b"), defaults={"a": 1})
        schema.attributes_list().append("c")
        schema.default_values()["a"] = 2
        assert schema.attributes_list() == ["a", "b"]
        assert schema.default_values() == {"a": 1}

    def test_filters_are_listed_per_kind(self):
        schema = ModelSchema(attribute_filters={"strip_tags": ("a", "b")})
        assert schema.filters() == {"strip_tags": ["a", "b"]}


class TestCheckRule:
    """Test rule declaration shape checks."""

    def test_valid_rule(self):
        names, spec = check_rule((["title"], {"required": {}}), "Realty")
        assert names == ["title"]
        assert spec == {"required": {}}

    @pytest.mark.parametrize("rule", [
        "title",
        {"required": {}},
        (["title"],),
        (["title"], {"required": {}}, "extra"),
        ("title", {"required": {}}),
        ([1, 2], {"required": {}}),
        (["title"], {}),
        (["title"], {"required": {}, "length": {"max": 3}}),
        (["title"], {"length": 3}),
        (["title"], "required"),
    ])
    def test_malformed_rules(self, rule):
        with pytest.raises(RuleDeclarationError) as exc_info:
            check_rule(rule, "Realty")
        assert exc_info.value.model_name == "Realty"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_malformed_rule_aborts_construction(self):
        class Broken(BaseModel):
            schema = ModelSchema(attributes=("title",), validation_rules=(("title", {"required": {}}),))

        with pytest.raises(RuleDeclarationError):
            Broken()

    def test_non_numeric_bound_aborts_construction(self):
        class Price(BaseModel):
            schema = ModelSchema(attributes=("price",), validation_rules=((["price"], {"numeric": {"max": "ten"}}),))

        with pytest.raises(RuleDeclarationError):
            Price({"price": 42})

    def test_numeric_string_bound_is_coerced(self):
        class Price(BaseModel):
            schema = ModelSchema(attributes=("price",), validation_rules=((["price"], {"numeric": {"max": "10"}}),))

        price = Price({"price": 42})

        assert price.validate() is False
        assert price.errors == {"price": "Field price value can not be greater than 10"}


class TestSchemaOverrides:
    """Test declaring a schema by overriding model methods."""

    def test_overridden_methods(self):
        class Apartment(BaseModel):
            def attributes_list(self):
                return ["realty_id", "floor"]

            def default_values(self):
                return {"floor": 1}

            def rules(self):
                return [(["floor"], {"numeric": {"min": 0}})]

            def unsafe_attributes_list(self):
                return ["realty_id"]

        apartment = Apartment()
        assert apartment.get("floor") == 1
        assert apartment.get_validator("floor") == {"numeric": {"min": 0}}
        assert apartment.unsafe_attributes == ["realty_id"]

    def test_custom_schema_provider(self):
        class HouseSchema:
            def attributes_list(self):
                return ["realty_id", "garden"]

            def default_values(self):
                return {"garden": True}

            def rules(self):
                return []

            def unsafe_attributes_list(self):
                return []

            def filters(self):
                return {}

        class House(BaseModel):
            schema = HouseSchema()

        assert isinstance(HouseSchema(), SchemaProvider)
        assert House().attributes == {"garden": True}
