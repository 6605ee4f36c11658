""" Module for forward steno dictionaries and their inverses. """

from collections import defaultdict
import json
from typing import Dict, Iterator, Mapping, Tuple

from .errors import DictionaryNotFoundError, DictionaryParseError

Stroke = str                       # RTFCRE steno keys, with multiple strokes joined by "/".
Translation = str                  # Text produced by a stroke. Compared exactly, with no case folding.
StrokeList = Tuple[Stroke, ...]    # Sorted, duplicate-free group of strokes with the same translation.


class StenoDictionary(Mapping[Stroke, Translation]):
    """ Read-only forward dictionary mapping strokes to translations, as Plover stores them in JSON. """

    __slots__ = ("_d",)

    def __init__(self, d:Dict[Stroke, Translation]) -> None:
        self._d = d  # Raw dict owned exclusively by this instance. Never handed out.

    def __getitem__(self, stroke:Stroke) -> Translation:
        return self._d[stroke]

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({len(self)} entries)'

    @classmethod
    def load(cls, path:str, *, encoding='utf-8') -> "StenoDictionary":
        """ Load a JSON dictionary file. Nothing is returned unless the entire file is valid. """
        try:
            with open(path, 'r', encoding=encoding) as fp:
                s = fp.read()
        except FileNotFoundError:
            raise DictionaryNotFoundError(path) from None
        except UnicodeDecodeError as e:
            raise DictionaryParseError(path, f'not valid {encoding} text') from e
        try:
            d = json.loads(s)
        except json.JSONDecodeError as e:
            # A line number is useless on a one-line file. Show what is around the error instead.
            i = e.pos
            context = repr(e.doc[max(i-20, 0):i] + '<<!>>' + e.doc[i:i+20])[1:-1]
            raise DictionaryParseError(path, f'{e.msg} near ...{context}...') from None
        cls._check_shape(path, d)
        return cls(d)

    @staticmethod
    def _check_shape(path:str, d:object) -> None:
        """ The top level must be an object with string values. JSON object keys are always strings. """
        if not isinstance(d, dict):
            raise DictionaryParseError(path, 'expected a JSON object, got ' + type(d).__name__)
        for k, v in d.items():
            if not isinstance(v, str):
                raise DictionaryParseError(path, f'translation for "{k}" is a {type(v).__name__}, not a string')

    def invert(self) -> "InvertedDictionary":
        """ Make a reverse dictionary of (translation: strokes) from this one. Each entry is visited once.
            Keys are unique in the forward dict, so a sort is all it takes to make each group canonical. """
        rdict = defaultdict(list)
        list(map(list.append, [rdict[v] for v in self._d.values()], self._d))
        return InvertedDictionary({v: tuple(sorted(strokes)) for v, strokes in rdict.items()})


class InvertedDictionary(Mapping[Translation, StrokeList]):
    """
    A reverse steno dictionary. Maps a translation to every stroke that produces it in the forward dictionary.

    Forward dictionaries are many-to-one, so each entry here is a group of strokes. Groups are tuples sorted
    in string order, which makes lookup output identical from run to run regardless of the order of the file.
    There are no mutating methods; once built, instances may be shared freely between threads.
    """

    __slots__ = ("_d",)

    def __init__(self, d:Dict[Translation, StrokeList]) -> None:
        self._d = d

    def __getitem__(self, translation:Translation) -> StrokeList:
        return self._d[translation]

    def __iter__(self) -> Iterator[Translation]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({len(self)} translations)'

    def strokes(self, translation:Translation) -> StrokeList:
        """ Return all strokes for <translation>, or an empty tuple if there are none. """
        return self._d.get(translation, ())


def load_inverted(path:str) -> InvertedDictionary:
    """ Load a forward dictionary and return only its inverse. The forward dict is garbage after this. """
    return StenoDictionary.load(path).invert()
