""" Package for reverse steno lookup: given a word or phrase, find every stroke that produces it.

    dictionary - Plover dictionaries are JSON files mapping strokes to translations. Each one is loaded
    into a read-only forward dictionary, then inverted into a reverse dictionary of (translation: strokes).
    The forward dictionary is only needed long enough to make the inverse.

    index - The user's dictionaries are loaded in parallel and kept in order of precedence as an index set.
    A lookup searches every dictionary in that order and returns all of the strokes found, with no merging.
    Once built, the index set never changes, so any number of threads may search it at the same time.

    plover - Unless told otherwise, the dictionary list comes from the user's Plover configuration file.
    Dictionaries given on the command line are added after those.

    http - A small HTTP/1.1 server answers lookup queries from a pool of worker threads.

    output - Results may also be printed once as plain text or as an Alfred script filter document.

    __main__ - When steno_lookup is run directly as a script, the first command-line argument will be used
    to choose one of the application entry points: http, lookup, or alfred. """

__version__ = "0.1.0"

from .dictionary import InvertedDictionary, StenoDictionary, load_inverted
from .errors import ConfigNotFoundError, ConfigParseError, DictionaryNotFoundError, DictionaryParseError, \
    HomeNotFoundError, SectionMissingError, StenoLookupError
from .index import build_index_set, IndexSet, IndexSetBuilder, lookup
