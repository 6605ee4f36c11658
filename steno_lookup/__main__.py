#!/usr/bin/env python3

""" Master console script and primary entry point for steno lookup. """

import sys
from typing import Callable, List, Sequence

# Entry point callables by mode as (module name, function name, description).
# Modules are imported only when their mode is chosen.
ENTRY_POINTS = {
    "http":   ("steno_lookup.main_http",    "main",        "Serve lookups over HTTP until interrupted."),
    "lookup": ("steno_lookup.main_console", "main_lookup", "Print every stroke for a word, one per line."),
    "alfred": ("steno_lookup.main_console", "main_alfred", "Print every stroke for a word as Alfred JSON.")
}

MainFunction = Callable[[Sequence[str]], int]


def _match(mode:str) -> List[str]:
    """ Return every mode that starts with <mode>. An exact match always wins. """
    if not mode:
        return []
    if mode in ENTRY_POINTS:
        return [mode]
    return [k for k in ENTRY_POINTS if k.startswith(mode)]


def _error_main(error_msg:str) -> MainFunction:
    """ Return a main callable that prints every available mode and returns an error code. """
    lines = [error_msg, '', 'Currently available operations:',
             *[f"{k} - {desc}" for k, (_, _, desc) in ENTRY_POINTS.items()]]
    def print_error(argv:Sequence[str]) -> int:
        for s in lines:
            print(s)
        return -1
    return print_error


def load(mode="") -> MainFunction:
    """ Make sure <mode> matches exactly one entry point, then import and return its main callable. """
    matches = _match(mode)
    if len(matches) == 1:
        module_name, func_name, _ = ENTRY_POINTS[matches[0]]
        module = __import__(module_name, fromlist=[func_name])
        return getattr(module, func_name)
    if matches:
        error_msg = f'Operation "{mode}" has multiple matches. Use more characters.'
    elif not mode:
        error_msg = 'An operation mode is required as the first command-line argument.'
    else:
        error_msg = f'No matches for operation "{mode}".'
    return _error_main(error_msg)


def main(argv:Sequence[str]=None) -> int:
    """ Run an entry point using the first command-line argument as the mode.
        The mode is shifted onto the script name so that it shows up in help without being parsed as an option. """
    script, *args = sys.argv if argv is None else argv
    if not args:
        return load()([script])
    mode, *rest = args
    return load(mode)([f'{script} {mode}', *rest])


if __name__ == '__main__':
    sys.exit(main())
