from extraction.shape import (
    FlatShape,
    GroupKey,
    GroupedShape,
    classify_shape,
    flatten_grouped,
    normalize_shape,
)
from extraction.validation import validate_record


FULL_GROUPED = {
    "Basic Information": {"name": "Masala Oats", "company": "Saffola", "netWeight": "500 g"},
    "Dates & Batch": {"expiryDate": "2025-06-30", "batchNumber": "B12"},
    "Ingredients & Nutrition": {
        "ingredients": ["Oats", "Spices", "Salt"],
        "nutritionalInfo": {"energy": "380 kcal", "protein": "11 g"},
    },
    "Manufacturing & Regulatory": {
        "manufacturingAddresses": ["Plot 4, Pune"],
        "fssaiLicense": ["A1234", "B5678"],
        "vegetarian": "Yes",
    },
    "Contact Information": {"consumerContact": {"phone": "1800-123", "email": "care@example.com"}},
    "Other Details": {"otherDetails": {"storage": "Cool and dry place"}},
}


def test_flat_input_is_returned_unchanged():
    flat = {"name": "Choco Bar", "mrp": "₹50"}
    assert normalize_shape(flat) is flat


def test_name_at_top_level_wins_over_group_keys():
    raw = {"name": "Tea", "Basic Information": {"name": "Other"}, "Dates & Batch": {}}
    assert isinstance(classify_shape(raw), FlatShape)
    assert normalize_shape(raw) is raw


def test_object_without_distinctive_groups_is_flat():
    raw = {"Contact Information": {"consumerContact": {"phone": "1"}}}
    assert isinstance(classify_shape(raw), FlatShape)


def test_grouped_is_detected_from_either_distinctive_group():
    assert isinstance(classify_shape({"Basic Information": {"name": "Tea"}}), GroupedShape)
    assert isinstance(classify_shape({"Dates & Batch": {"expiryDate": "2025"}}), GroupedShape)


def test_grouped_flattens_to_union_of_lifted_fields():
    flat = normalize_shape(FULL_GROUPED)

    assert flat == {
        "name": "Masala Oats",
        "company": "Saffola",
        "netWeight": "500 g",
        "expiryDate": "2025-06-30",
        "batchNumber": "B12",
        "ingredients": ["Oats", "Spices", "Salt"],
        "nutritionalInfo": {"energy": "380 kcal", "protein": "11 g"},
        "manufacturingAddresses": ["Plot 4, Pune"],
        "fssaiLicense": "A1234, B5678",
        "vegetarian": "Yes",
        "consumerContact": {"phone": "1800-123", "email": "care@example.com"},
        "otherDetails": {"storage": "Cool and dry place"},
    }


def test_scalar_license_and_vegetarian_are_stringified():
    raw = {
        "Basic Information": {"name": "Tea"},
        "Manufacturing & Regulatory": {"fssaiLicense": 10012345678901, "vegetarian": True},
    }
    flat = flatten_grouped(raw)
    assert flat["fssaiLicense"] == "10012345678901"
    assert flat["vegetarian"] == "true"


def test_boolean_license_items_use_lowercase_text():
    raw = {
        "Basic Information": {"name": "Tea"},
        "Manufacturing & Regulatory": {"fssaiLicense": ["A1234", False]},
    }
    assert flatten_grouped(raw)["fssaiLicense"] == "A1234, false"


def test_missing_contact_group_is_tolerated():
    raw = {key: value for key, value in FULL_GROUPED.items() if key != GroupKey.CONTACT_INFORMATION.value}

    flat = normalize_shape(raw)
    record = validate_record(flat)

    assert "consumerContact" not in flat
    assert record.consumer_contact is None
    assert record.name == "Masala Oats"


def test_falsy_values_inside_groups_are_dropped():
    raw = {
        "Basic Information": {"name": "Tea"},
        "Ingredients & Nutrition": {"ingredients": [], "nutritionalInfo": None},
        "Manufacturing & Regulatory": {"fssaiLicense": "", "vegetarian": 0},
        "Other Details": {"otherDetails": {}},
    }
    assert flatten_grouped(raw) == {"name": "Tea"}


def test_non_object_groups_are_skipped():
    raw = {"Basic Information": "Tea", "Dates & Batch": {"expiryDate": "2025-12-01"}}
    assert flatten_grouped(raw) == {"expiryDate": "2025-12-01"}


def test_grouped_scenario_flattens_to_two_fields():
    raw = {"Basic Information": {"name": "Tea"}, "Dates & Batch": {"expiryDate": "2025-12-01"}}
    assert normalize_shape(raw) == {"name": "Tea", "expiryDate": "2025-12-01"}


def test_group_keys_are_the_six_headings():
    assert [key.value for key in GroupKey] == [
        "Basic Information",
        "Dates & Batch",
        "Ingredients & Nutrition",
        "Manufacturing & Regulatory",
        "Contact Information",
        "Other Details",
    ]


def test_falsy_values_in_merged_groups_are_dropped():
    raw = {
        "Basic Information": {"name": "Tea", "mrp": 0, "barcode": ""},
        "Dates & Batch": {"expiryDate": None, "batchNumber": "B7"},
    }

    flat = flatten_grouped(raw)
    record = validate_record(flat)

    assert flat == {"name": "Tea", "batchNumber": "B7"}
    assert record.mrp is None
