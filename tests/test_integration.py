"""End-to-end: load text, edit rows, export text."""

from jsonrows import Document, TypeTag, YAMLConverter, detect, is_valid, parse_value


YAML_SOURCE = """\
title: Field notes
visits: 3
budget: 120.50
public: true
tags: [birds, coast]
crew: [Ann Lee, Bo]
homepage: https://example.com/notes
started: 2024-04-01
camp:
  latitude: "51.5"
  longitude: "-0.12"
  altitude: "11"
extra:
  source: survey
"""


def _load():
    conv = YAMLConverter()
    assert conv.set_yaml(YAML_SOURCE)
    received = []
    doc = Document(on_change=received.append)
    doc.set_source(conv.get_data())
    return doc, received


def test_types_inferred_from_yaml():
    doc, _ = _load()
    types = {row.key: row.type for row in doc.rows}
    assert types == {
        "title": TypeTag.STRING,
        "visits": TypeTag.NUMBER,
        "budget": TypeTag.NUMBER,
        "public": TypeTag.BOOLEAN,
        "tags": TypeTag.TAG_LIST,
        "crew": TypeTag.ARRAY_OF_STRINGS,
        "homepage": TypeTag.URL,
        "started": TypeTag.DATE,
        "camp": TypeTag.LOCATION,
        "extra": TypeTag.JSON,
    }


def test_edit_session_exports_json():
    doc, received = _load()
    doc.set_value(1, "4")
    doc.change_type(2, "money")
    doc.set_value(4, "birds, coast, night owl")
    doc.add_row()
    doc.set_key(len(doc) - 1, "notes")
    doc.set_value(len(doc) - 1, "windy")
    result = received[-1]
    assert result["visits"] == 4
    assert result["budget"] == 120.5
    assert result["tags"] == ["birds", "coast"]
    assert result["notes"] == "windy"
    assert list(result)[-1] == "notes"
    assert doc.display_value(2) == "120.50"


def test_export_back_to_yaml():
    doc, _ = _load()
    conv = YAMLConverter()
    conv.set_data(doc.export_json())
    text = conv.get_yaml()
    assert text.startswith("title: Field notes\nvisits: 3\n")
    assert "latitude: '51.5'" in text


def test_invalid_edit_kept_until_fixed():
    doc, received = _load()
    doc.set_value(1, "three")
    assert doc.invalid_rows() == [1]
    assert received[-1]["visits"] == 0
    doc.set_value(1, "3")
    assert doc.invalid_rows() == []
    assert received[-1]["visits"] == 3


def test_documented_properties():
    assert detect(19.99) is TypeTag.MONEY
    assert detect(20) is TypeTag.NUMBER
    assert detect(20.1) is TypeTag.NUMBER
    assert detect(["a", "b", "c"]) is TypeTag.TAG_LIST
    assert detect(["a b", "c"]) is TypeTag.ARRAY_OF_STRINGS
    assert detect({"latitude": "1", "longitude": "2", "altitude": "3"}) is TypeTag.LOCATION
    assert detect({"foo": 1}) is TypeTag.JSON
    assert parse_value("not a number", TypeTag.NUMBER) == 0
    assert parse_value("", TypeTag.ARRAY_OF_STRINGS) == []
    assert all(is_valid("", tag) for tag in TypeTag)
    assert not is_valid("a b", TypeTag.TAG_LIST)
    assert is_valid("a,b", TypeTag.TAG_LIST)
