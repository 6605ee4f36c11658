""" Formatters for lookup results shown outside of the HTTP server. """

import json
from typing import Dict, Iterable, List, Optional, Union

from .dictionary import Stroke

JSONDict = Dict[str, Union[None, bool, str, dict]]


def format_text(strokes:Iterable[Stroke]) -> str:
    """ One stroke per line. No matches means no text at all. """
    return "\n".join(strokes)


class ScriptFilterItem:
    """ One result row for an Alfred script filter. Unset optional fields are left out of the JSON. """

    ITEM_TYPES = ("default", "file", "file:skipcheck")
    ICON_TYPES = ("fileicon", "filetype")

    def __init__(self, title:str, *, uid:str=None, item_type:str=None, subtitle:str=None, arg:str=None,
                 icon_path:str=None, icon_type:str=None, valid=True, match:str=None, autocomplete:str=None) -> None:
        if item_type is not None and item_type not in self.ITEM_TYPES:
            raise ValueError(f'Unknown Alfred item type "{item_type}".')
        if icon_type is not None and icon_type not in self.ICON_TYPES:
            raise ValueError(f'Unknown Alfred icon type "{icon_type}".')
        self.title = title
        self.uid = uid
        self.item_type = item_type
        self.subtitle = subtitle
        self.arg = arg
        self.icon_path = icon_path
        self.icon_type = icon_type
        self.valid = valid
        self.match = match
        self.autocomplete = autocomplete

    def to_json(self) -> JSONDict:
        """ Alfred's field names "type" and "match" are Python keywords/builtins, so they are renamed here. """
        d = {"uid": self.uid,
             "type": self.item_type,
             "title": self.title,
             "subtitle": self.subtitle,
             "arg": self.arg,
             "icon": self._icon_json(),
             "valid": self.valid,
             "match": self.match,
             "autocomplete": self.autocomplete}
        return {k: v for k, v in d.items() if v is not None}

    def _icon_json(self) -> Optional[JSONDict]:
        if self.icon_path is None:
            return None
        icon = {"path": self.icon_path}
        if self.icon_type is not None:
            icon["type"] = self.icon_type
        return icon


def alfred_items(strokes:Iterable[Stroke]) -> List[ScriptFilterItem]:
    """ Each stroke becomes an item that copies itself when chosen. """
    return [ScriptFilterItem(s, arg=s) for s in strokes]


def format_alfred(strokes:Iterable[Stroke]) -> str:
    """ Return an Alfred script filter JSON document. ensure_ascii=False keeps Unicode symbols intact. """
    doc = {"items": [item.to_json() for item in alfred_items(strokes)]}
    return json.dumps(doc, ensure_ascii=False)
