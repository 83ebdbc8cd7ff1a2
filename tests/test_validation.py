import logging

import pytest
from pydantic import ValidationError

from domain.product import ConsumerContact, NutritionalInfo, ProductRecord
from extraction.validation import best_effort_extract, strict_validate, validate_record


def test_flat_scenario_sets_only_given_fields():
    record = validate_record({"name": "Choco Bar", "mrp": "₹50", "ingredients": ["Cocoa", "Sugar", "Milk"]})

    assert record == ProductRecord(name="Choco Bar", mrp="₹50", ingredients=("Cocoa", "Sugar", "Milk"))
    assert record.company is None
    assert record.nutritional_info is None
    assert record.other_details is None


def test_null_blank_and_empty_values_become_none():
    result = strict_validate(
        {
            "name": None,
            "company": "  ",
            "ingredients": [],
            "otherDetails": {},
            "nutritionalInfo": {"energy": None, "protein": ""},
            "consumerContact": {},
        }
    )

    assert result.ok
    assert result.record.is_empty()


def test_nested_records_use_camel_case_keys():
    result = strict_validate(
        {
            "nutritionalInfo": {"totalCarbohydrate": "60 g", "servingSize": "Per 100g"},
            "consumerContact": {"website": "https://example.com"},
        }
    )

    assert result.record.nutritional_info == NutritionalInfo(total_carbohydrate="60 g", serving_size="Per 100g")
    assert result.record.consumer_contact == ConsumerContact(website="https://example.com")


def test_strict_reports_single_string_ingredients():
    result = strict_validate({"name": "Choco Bar", "ingredients": "Cocoa, Sugar"})

    assert not result.ok
    assert result.record is None
    assert any(issue.startswith("ingredients") for issue in result.issues)


def test_strict_rejects_numbers_for_text_fields():
    result = strict_validate({"mrp": 50})
    assert not result.ok


def test_bad_field_falls_back_without_losing_others():
    record = validate_record(
        {"name": "Choco Bar", "mrp": "₹50", "ingredients": "Cocoa, Sugar", "batchNumber": "L-22"}
    )

    assert record.ingredients is None
    assert record.name == "Choco Bar"
    assert record.mrp == "₹50"
    assert record.batch_number == "L-22"


def test_fallback_is_logged_as_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="extraction.validation"):
        validate_record({"ingredients": "Cocoa"})

    assert "SchemaValidationWarning" in caplog.text
    assert "ingredients" in caplog.text


def test_best_effort_stringifies_numbers_and_drops_booleans():
    record = best_effort_extract({"barcode": 8901234567890, "mrp": 50.5, "vegetarian": True})

    assert record.barcode == "8901234567890"
    assert record.mrp == "50.5"
    assert record.vegetarian is None


def test_best_effort_keeps_string_items_of_sequences():
    record = best_effort_extract(
        {"ingredients": ["Salt", None, {"x": 1}, "Sugar"], "manufacturingAddresses": [None]}
    )

    assert record.ingredients == ("Salt", "Sugar")
    assert record.manufacturing_addresses is None


def test_best_effort_nested_and_mapping_fields():
    record = best_effort_extract(
        {
            "nutritionalInfo": {"energy": "555 kcal", "protein": 7, "sodium": ["x"]},
            "consumerContact": "call 1800-123",
            "otherDetails": {"storage": "Cool place", "rating": {"stars": 4}, "packs": 3},
        }
    )

    assert record.nutritional_info == NutritionalInfo(energy="555 kcal", protein="7")
    assert record.consumer_contact is None
    assert record.other_details == {"storage": "Cool place", "packs": "3"}


def test_best_effort_never_raises_on_garbage():
    record = best_effort_extract(
        {"name": ["Tea"], "company": {"a": 1}, "nutritionalInfo": [], "otherDetails": ["a"], "mrp": float("nan")}
    )
    assert record.is_empty()


def test_record_is_frozen():
    record = ProductRecord(name="Tea")
    with pytest.raises(ValidationError):
        record.name = "Coffee"


def test_snake_case_input_and_camel_case_output():
    record = ProductRecord.model_validate({"net_weight": "200 g", "fssaiLicense": "A1234"})

    assert record.net_weight == "200 g"
    assert record.to_json_dict() == {"netWeight": "200 g", "fssaiLicense": "A1234"}


def test_other_details_cannot_be_changed_after_validation():
    record = validate_record({"otherDetails": {"storage": "Cool"}})

    with pytest.raises(TypeError):
        record.other_details["storage"] = "Warm"

    assert record.other_details == {"storage": "Cool"}
    assert record.to_json_dict() == {"otherDetails": {"storage": "Cool"}}


def test_records_are_hashable_values():
    first = validate_record({"name": "Tea", "ingredients": ["Leaves"], "otherDetails": {"a": "1", "b": "2"}})
    second = validate_record({"name": "Tea", "ingredients": ["Leaves"], "otherDetails": {"b": "2", "a": "1"}})

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second, ProductRecord()}) == 2


def test_blank_items_in_lists_and_mappings_are_dropped():
    record = validate_record(
        {"ingredients": ["", "  ", "Sugar"], "manufacturingAddresses": [" "], "otherDetails": {"a": "", "b": "x"}}
    )

    assert record.ingredients == ("Sugar",)
    assert record.manufacturing_addresses is None
    assert record.other_details == {"b": "x"}


def test_best_effort_drops_blank_items_too():
    record = best_effort_extract({"ingredients": ["", "Salt", 3], "otherDetails": {"a": " "}, "mrp": 5})

    assert record.ingredients == ("Salt", "3")
    assert record.other_details is None
