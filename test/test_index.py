""" Unit tests for building and searching index sets. """

import threading
import time

import pytest

from steno_lookup.dictionary import InvertedDictionary, StenoDictionary
from steno_lookup.errors import DictionaryNotFoundError, DictionaryParseError
from steno_lookup.index import build_index_set, IndexSet, IndexSetBuilder, lookup

from . import BAD_JSON_PATH, MAIN_DICT_PATH, USER_DICT_PATH


def _inverted(d:dict) -> InvertedDictionary:
    return StenoDictionary(d).invert()


def test_lookup_precedence() -> None:
    """ Results from each dictionary are concatenated in slot order. """
    index_set = IndexSet([_inverted({"TEF": "test"}), _inverted({"TEFT": "test"})])
    assert index_set.lookup("test") == ("TEF", "TEFT")
    assert lookup(index_set, "test") == ["TEF", "TEFT"]
    index_set = IndexSet(reversed(index_set))
    assert lookup(index_set, "test") == ["TEFT", "TEF"]


def test_lookup_missing() -> None:
    index_set = IndexSet([_inverted({"TEF": "test"}), _inverted({"TEFT": "test"})])
    assert lookup(index_set, "nonexistent") == []
    assert lookup(IndexSet(), "test") == []


def test_lookup_keeps_duplicates() -> None:
    """ The same stroke in two dictionaries is reported once for each. """
    d = {"TEFT": "test"}
    index_set = IndexSet([_inverted(d), _inverted(d)])
    assert lookup(index_set, "test") == ["TEFT", "TEFT"]


def test_index_set_is_sequence() -> None:
    dicts = [_inverted({"TEF": "test"}), _inverted({"KAT": "cat", "KA*T": "cat"})]
    index_set = IndexSet(dicts)
    assert len(index_set) == 2
    assert list(index_set) == dicts
    assert index_set[1] is dicts[1]
    assert index_set.size() == (2, 3)
    with pytest.raises(AttributeError):
        index_set.extra = 1


def test_build_from_files() -> None:
    """ Files are loaded in the order given, and so are the lookup results. """
    index_set = build_index_set([USER_DICT_PATH, MAIN_DICT_PATH])
    assert len(index_set) == 2
    assert lookup(index_set, "test") == ["T-FT", "T*EFT", "TEF", "TEFT"]
    assert lookup(index_set, "hello") == ["HO*EL", "HEHL", "HEL/HRO"]
    assert lookup(index_set, "testing") == ["TEFT/-G"]
    index_set = build_index_set([MAIN_DICT_PATH, USER_DICT_PATH])
    assert lookup(index_set, "test") == ["T*EFT", "TEF", "TEFT", "T-FT"]


def test_build_same_file_twice() -> None:
    index_set = build_index_set([MAIN_DICT_PATH, MAIN_DICT_PATH], workers=1)
    assert len(index_set) == 2
    assert lookup(index_set, "cat") == ["KAT", "KAT"]


def test_build_empty() -> None:
    assert len(build_index_set([])) == 0


def test_build_not_found() -> None:
    """ Any missing file fails the whole build. """
    missing = MAIN_DICT_PATH + ".missing"
    with pytest.raises(DictionaryNotFoundError) as exc_info:
        build_index_set([MAIN_DICT_PATH, missing, USER_DICT_PATH])
    assert exc_info.value.path == missing


def test_build_parse_error() -> None:
    with pytest.raises(DictionaryParseError):
        build_index_set([MAIN_DICT_PATH, BAD_JSON_PATH])


def test_build_order_with_uneven_load_times() -> None:
    """ Slots follow the input order even when later files finish loading first. """
    delays = {"slow": 0.2, "medium": 0.1, "fast": 0.0}
    def loader(name:str) -> InvertedDictionary:
        time.sleep(delays[name])
        return _inverted({name.upper(): "word"})
    builder = IndexSetBuilder(loader, workers=3)
    index_set = builder.build(["slow", "medium", "fast"])
    assert lookup(index_set, "word") == ["SLOW", "MEDIUM", "FAST"]


def test_build_runs_in_parallel() -> None:
    """ With enough workers, every file is loading at the same time. """
    n = 4
    barrier = threading.Barrier(n, timeout=5.0)
    def loader(name:str) -> InvertedDictionary:
        barrier.wait()
        return _inverted({name: "word"})
    index_set = IndexSetBuilder(loader, workers=n).build(map(str, range(n)))
    assert lookup(index_set, "word") == ["0", "1", "2", "3"]


def test_build_fails_fast() -> None:
    """ Files still waiting for a worker are cancelled once one has failed.
        The worker may already be starting the next file when that happens, but no more than one. """
    queued = [f"queued{i}" for i in range(5)]
    started = []
    def loader(path:str) -> InvertedDictionary:
        if path == "bad":
            raise DictionaryNotFoundError(path)
        started.append(path)
        time.sleep(0.05)
        return _inverted({})
    builder = IndexSetBuilder(loader, workers=1)
    with pytest.raises(DictionaryNotFoundError) as exc_info:
        builder.build(["good", "bad", *queued])
    assert exc_info.value.path == "bad"
    assert started[0] == "good"
    assert len([p for p in started if p in queued]) <= 1
