""" Module for building and querying an ordered set of reverse steno dictionaries. """

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from os import cpu_count
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .dictionary import InvertedDictionary, load_inverted, Stroke, StrokeList, Translation


class IndexSet(Sequence[InvertedDictionary]):
    """ Immutable sequence of reverse dictionaries in order of precedence (slot 0 first).
        Lookups only read from the dictionaries, so any number of threads may share one instance without locks. """

    __slots__ = ("_dicts",)

    def __init__(self, dicts:Iterable[InvertedDictionary]=()) -> None:
        self._dicts = tuple(dicts)

    def __getitem__(self, i):
        return self._dicts[i]

    def __iter__(self) -> Iterator[InvertedDictionary]:
        return iter(self._dicts)

    def __len__(self) -> int:
        return len(self._dicts)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({len(self)} dictionaries)'

    def lookup(self, translation:Translation) -> StrokeList:
        """ Return every stroke for <translation> from every dictionary in order of precedence.
            Each dictionary contributes its own sorted group. The same stroke may appear more than once. """
        strokes = []
        for d in self._dicts:
            strokes += d.strokes(translation)
        return tuple(strokes)

    def size(self) -> Tuple[int, int]:
        """ Return the total number of translations and strokes in all dictionaries. """
        n_translations = sum(map(len, self._dicts))
        n_strokes = sum([len(strokes) for d in self._dicts for strokes in d.values()])
        return n_translations, n_strokes


Loader = Callable[[str], InvertedDictionary]


class IndexSetBuilder:
    """ Loads and inverts dictionary files in parallel using a thread pool.

        Every file is an independent task with no shared state, and results are placed by position,
        so the finished index is in the order the paths were given no matter which file finishes first.
        The first failure cancels anything still queued, and its exception propagates out of build(). """

    def __init__(self, loader:Loader=load_inverted, *, workers:int=None) -> None:
        self._loader = loader                        # Callable to load and invert a single dictionary file.
        self._workers = workers or cpu_count() or 1  # Maximum number of files to load at once.

    def build(self, paths:Iterable[str]) -> IndexSet:
        """ Load every file in <paths> and return the results as an index set. Nothing is returned on failure. """
        paths = list(paths)
        if not paths:
            return IndexSet()
        workers = min(self._workers, len(paths))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dict-loader") as executor:
            futures = [executor.submit(self._loader, path) for path in paths]
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
            for f in not_done:
                f.cancel()
            failed = self._first_failure(futures, done)
            if failed is not None:
                raise failed.exception()
        return IndexSet([f.result() for f in futures])

    @staticmethod
    def _first_failure(futures:List[Future], done:Set[Future]) -> Optional[Future]:
        """ Return the lowest-positioned finished task that raised an exception, if any. """
        for f in futures:
            if f in done and not f.cancelled() and f.exception() is not None:
                return f
        return None


def build_index_set(paths:Iterable[str], *, workers:int=None) -> IndexSet:
    """ Load, invert, and collect dictionaries from <paths> with the default loader. """
    return IndexSetBuilder(workers=workers).build(paths)


def lookup(index_set:IndexSet, translation:Translation) -> List[Stroke]:
    """ Return the strokes for <translation> from <index_set> as a list (for JSON and text output). """
    return list(index_set.lookup(translation))
