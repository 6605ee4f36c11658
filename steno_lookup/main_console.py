""" Main module for one-shot lookups printed to the console. """

import sys
from typing import Callable, Iterable, Sequence

from .app import StenoLookup
from .errors import StenoLookupError
from .options import LookupOptions
from .output import format_alfred, format_text

Formatter = Callable[[Iterable[str]], str]


def run_lookup(formatter:Formatter, description:str, argv:Sequence[str]=None) -> int:
    """ Build the index, look up the words given as positional arguments, and print the strokes found.
        Output goes to stdout; progress and errors go to the log (stderr by default). """
    opts = LookupOptions(description)
    app = StenoLookup(opts, argv=argv)
    logger = app.logger
    try:
        index_set = app.index_set
    except (StenoLookupError, OSError) as e:
        logger.error(str(e))
        return 1
    finally:
        logger.close()
    strokes = index_set.lookup(opts.search_term())
    text = formatter(strokes)
    if text:
        print(text)
    return 0


def main_lookup(argv:Sequence[str]=None) -> int:
    return run_lookup(format_text, "Print every steno stroke for a word or phrase, one per line.", argv)


def main_alfred(argv:Sequence[str]=None) -> int:
    return run_lookup(format_alfred, "Print every steno stroke for a word or phrase as an Alfred script filter.", argv)


if __name__ == '__main__':
    sys.exit(main_lookup())
