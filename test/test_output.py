""" Unit tests for console output formats. """

import json

import pytest

from steno_lookup.output import format_alfred, format_text, ScriptFilterItem


def test_text() -> None:
    assert format_text(["TEF", "TEFT"]) == "TEF\nTEFT"
    assert format_text(["TEF"]) == "TEF"
    assert format_text([]) == ""


def test_alfred() -> None:
    """ Each stroke is an item that passes itself on when chosen. Unset fields are left out entirely. """
    doc = json.loads(format_alfred(["TEF", "TEFT"]))
    assert doc == {"items": [{"title": "TEF", "arg": "TEF", "valid": True},
                             {"title": "TEFT", "arg": "TEFT", "valid": True}]}
    assert json.loads(format_alfred([])) == {"items": []}


def test_alfred_unicode() -> None:
    text = format_alfred(["KAFR/É"])
    assert "KAFR/É" in text


def test_alfred_item_fields() -> None:
    item = ScriptFilterItem("TEFT", uid="1", item_type="file:skipcheck", subtitle="test", arg="TEFT",
                            icon_path="icon.png", icon_type="filetype", valid=False, match="t", autocomplete="te")
    assert item.to_json() == {"uid": "1",
                              "type": "file:skipcheck",
                              "title": "TEFT",
                              "subtitle": "test",
                              "arg": "TEFT",
                              "icon": {"path": "icon.png", "type": "filetype"},
                              "valid": False,
                              "match": "t",
                              "autocomplete": "te"}
    assert ScriptFilterItem("TEFT", icon_path="icon.png").to_json()["icon"] == {"path": "icon.png"}


@pytest.mark.parametrize("kwargs", [{"item_type": "folder"}, {"icon_type": "image"}])
def test_alfred_item_bad_types(kwargs) -> None:
    with pytest.raises(ValueError):
        ScriptFilterItem("TEFT", **kwargs)
