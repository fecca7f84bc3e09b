import dataclasses
import json
import typing
from pathlib import Path

import pytest
import yaml

from fixedwidth import marshal
from fixedwidth.errors import E_LAYOUT, E_RECORD, LayoutError
from fixedwidth.layout import (
    FieldDef,
    LayoutSpec,
    build_records,
    load_layout,
    load_records,
    parse_layout,
)
from fixedwidth.tags import TAG_KEY

PERSON_LAYOUT = {
    "record": "Person",
    "fields": [
        {"name": "id", "type": "int", "pos": "1,5"},
        {"name": "first_name", "type": "str", "pos": "6,15"},
        {"name": "last_name", "type": "str", "pos": "16,25"},
        {"name": "grade", "type": "float", "pos": "26,30", "optional": True},
    ],
}


def test_parse_layout_fields():
    layout = parse_layout(PERSON_LAYOUT)
    assert layout.record == "Person"
    assert [f.name for f in layout.fields] == [
        "id",
        "first_name",
        "last_name",
        "grade",
    ]
    assert layout.fields[3] == FieldDef("grade", "float", "26,30", True)
    assert layout.line_length == 30


def test_parse_layout_defaults():
    layout = parse_layout({"fields": [{"name": "a"}]})
    assert layout.record == "Record"
    assert layout.fields == [FieldDef("a", "str", None, False)]


def test_build_record_type():
    record_type = parse_layout(PERSON_LAYOUT).build_record_type()
    assert record_type.__name__ == "Person"
    fields = {f.name: f for f in dataclasses.fields(record_type)}
    assert fields["id"].metadata[TAG_KEY] == "1,5"
    hints = typing.get_type_hints(record_type)
    assert hints["id"] is int
    assert hints["grade"] == typing.Optional[float]


def test_records_encode_end_to_end():
    layout = parse_layout(PERSON_LAYOUT)
    records = build_records(
        [
            {"id": 1, "first_name": "Ian", "last_name": "Lopshire", "grade": 99.5},
            {"id": 2, "first_name": "Ada", "last_name": "Lovelace"},
        ],
        layout,
    )
    assert marshal(records) == (
        b"1    Ian       Lopshire  99.50\n2    Ada       Lovelace       "
    )


def test_single_mapping_is_one_record():
    layout = parse_layout(PERSON_LAYOUT)
    records = build_records(
        {"id": 7, "first_name": "A", "last_name": "B"}, layout
    )
    assert len(records) == 1


def test_columns_flag_skipped_fields():
    layout = parse_layout(
        {
            "fields": [
                {"name": "ok", "pos": "1,3,leftpad"},
                {"name": "bad", "pos": "9,2"},
                {"name": "none"},
            ]
        }
    )
    cols = layout.columns()
    assert [c.skipped for c in cols] == [False, True, True]
    assert (cols[0].start, cols[0].end, cols[0].width) == (1, 3, 3)
    assert cols[0].leftpad is True
    assert layout.line_length == 3


def test_any_field_accepts_mixed_values():
    layout = parse_layout(
        {"fields": [{"name": "v", "type": "any", "pos": "1,6"}]}
    )
    records = build_records([{"v": "ab"}, {"v": 12}, {"v": 1.5}, {}], layout)
    assert marshal(records) == b"ab    \n12    \n1.50  \n      "


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"fields": {}},
        {"record": "not valid", "fields": []},
        {"fields": ["id"]},
        {"fields": [{"name": "1abc"}]},
        {"fields": [{"name": "class"}]},
        {"fields": [{"name": "a"}, {"name": "a"}]},
        {"fields": [{"name": "a", "type": "bool"}]},
    ],
)
def test_parse_layout_errors(data):
    with pytest.raises(LayoutError) as exc:
        parse_layout(data)
    assert exc.value.code == E_LAYOUT


def test_build_records_unknown_field():
    layout = parse_layout(PERSON_LAYOUT)
    with pytest.raises(LayoutError) as exc:
        build_records(
            [{"id": 1, "first_name": "a", "last_name": "b", "age": 3}], layout
        )
    assert exc.value.code == E_RECORD
    assert "age" in exc.value.message


def test_build_records_missing_required():
    layout = parse_layout(PERSON_LAYOUT)
    with pytest.raises(LayoutError) as exc:
        build_records([{"id": 1}], layout)
    assert exc.value.code == E_RECORD
    assert exc.value.context == {"record": 0}


@pytest.mark.parametrize("data", ["text", [1, 2]])
def test_build_records_bad_shape(data):
    with pytest.raises(LayoutError):
        build_records(data, LayoutSpec(fields=[FieldDef("a")]))


def test_load_yaml_and_json(tmp_path: Path):
    layout_path = tmp_path / "person.yaml"
    layout_path.write_text(yaml.safe_dump(PERSON_LAYOUT))
    records_path = tmp_path / "people.json"
    records_path.write_text(
        json.dumps([{"id": 3, "first_name": "Bo", "last_name": "Li"}])
    )
    layout = load_layout(layout_path)
    assert layout.record == "Person"
    records = load_records(records_path, layout)
    assert marshal(records) == b"3    Bo        Li             "


def test_load_layout_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_layout(tmp_path / "nope.json")


def test_optional_float_field_formats_integral_values():
    layout = parse_layout(
        {
            "fields": [
                {"name": "grade", "type": "float", "optional": True, "pos": "1,5"},
                {"name": "rank", "type": "int", "optional": True, "pos": "6,8,leftpad"},
            ]
        }
    )
    records = build_records([{"grade": 99, "rank": 7}, {}], layout)
    assert marshal(records) == b"99.00007\n     000"
