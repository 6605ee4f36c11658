""" Container for the components shared by every entry point. """

from .index import IndexSet, IndexSetBuilder
from .options import LookupOptions
from .util.log import SystemLogger


class StenoLookup:
    """ Container/factory for all common components, and the basis for using steno lookup as a library. """

    def __init__(self, opts:LookupOptions=None, *, argv=None, parse_args=True) -> None:
        """ Start with the bare minimum of components and create the rest on demand. """
        if opts is None:
            opts = LookupOptions()
        if parse_args:
            opts.parse(argv)
        self._opts = opts

    class Component:
        """ Property-like descriptor to create a component if it does not exist, then save it over the attribute. """

        def __init__(self, func) -> None:
            self._func = func

        def __get__(self, instance, owner=None) -> object:
            value = self._func(instance)
            setattr(instance, self._func.__name__, value)
            return value

    @Component
    def logger(self) -> SystemLogger:
        """ Open a thread-safe logger that writes to stderr and an optional log file. """
        return self._opts.open_logger()

    @Component
    def index_set(self) -> IndexSet:
        """ Find, load, and invert every dictionary. Any failure propagates before anything is returned. """
        paths = self._opts.dictionary_paths()
        log = self.logger.info
        log(f"Loading {len(paths)} dictionaries...")
        builder = IndexSetBuilder(workers=self._opts.loader_workers())
        index_set = builder.build(paths)
        n_translations, n_strokes = index_set.size()
        log(f"Loaded {n_translations} translations with {n_strokes} strokes.")
        return index_set
