from typing import List, Optional

from .plover import DEFAULT_SECTION, PloverConfig
from .util.cmdline import CmdlineOptions
from .util.log import open_logger, SystemLogger


class LookupOptions(CmdlineOptions):
    """ Contains all command-line options necessary to find dictionaries and build the index. """

    def __init__(self, app_description="Look up the steno strokes for a word.") -> None:
        super().__init__(app_description)
        self.add("config", "",
                 "Path to plover.cfg. If not given, look in Plover's standard location.")
        self.add("noconfig", False,
                 "Do not load dictionaries from plover.cfg.")
        self.add("section", DEFAULT_SECTION,
                 "Section in plover.cfg to get the dictionary list from.")
        self.add("dict", [],
                 "JSON dictionary file to load after the Plover ones. Repeat to load more, in order.")
        self.add("workers", 0,
                 "Number of threads used to load dictionaries (0 = one per CPU core).")
        self.add("log", "",
                 "Text file to append status and exceptions to (in addition to stderr).")

    def config_path(self) -> str:
        return self.config or PloverConfig.default_path()

    def dictionary_paths(self) -> List[str]:
        """ Return the full list of dictionary files to load in order of precedence:
            enabled Plover dictionaries in config order, then dictionaries from the command line in given order.
            The same file may appear more than once; each occurrence is loaded separately. """
        paths = []
        if not self.noconfig:
            config = PloverConfig(self.config_path())
            paths += config.dictionary_paths(self.section)
        paths += self.dict
        return paths

    def loader_workers(self) -> Optional[int]:
        return self.workers or None

    def open_logger(self) -> SystemLogger:
        """ Open a logger that writes to stderr and the log file, if any. """
        filenames = [self.log] if self.log else []
        return open_logger(*filenames)

    def search_term(self) -> str:
        """ Return all positional arguments joined by spaces. Phrases may be given with or without quotes. """
        return " ".join(self.extras)
