""" Module for reading the dictionary list out of Plover's user configuration. """

from configparser import ConfigParser, Error as ConfigParserError
import json
import os
from typing import Iterator, List, NamedTuple

from .errors import ConfigNotFoundError, ConfigParseError, SectionMissingError
from .util.path import expand_tilde, user_data_directory

PLOVER_APP_NAME = "plover"
DEFAULT_SECTION = "System: English Stenotype"


class DictionaryConfigEntry(NamedTuple):
    """ One item of the dictionary list, exactly as Plover saves it. """

    enabled: bool
    path: str


class PloverConfig:
    """ Returns information about the user's Plover configuration. """

    DEFAULT_FILENAME = "plover.cfg"
    DICTIONARIES_KEY = "dictionaries"

    def __init__(self, cfg_path:str) -> None:
        self._cfg_path = cfg_path                        # Full path to the config file.
        self._parser = ConfigParser(interpolation=None)  # Plover writes raw values; '%' is not special.
        self._loaded = False

    @classmethod
    def default_path(cls, home:str=None) -> str:
        """ Return the path where Plover keeps its config file for the current user on this platform. """
        return os.path.join(user_data_directory(PLOVER_APP_NAME, home), cls.DEFAULT_FILENAME)

    def read(self) -> None:
        """ Parse the config file. Missing files are an error; ConfigParser.read() would silently skip them. """
        try:
            with open(self._cfg_path, 'r', encoding='utf-8') as fp:
                self._parser.read_file(fp)
        except FileNotFoundError:
            raise ConfigNotFoundError(self._cfg_path) from None
        except (ConfigParserError, UnicodeDecodeError) as e:
            raise ConfigParseError(self._cfg_path, str(e)) from e
        self._loaded = True

    def dictionaries(self, section:str=DEFAULT_SECTION) -> List[DictionaryConfigEntry]:
        """ Return every dictionary listed in <section>, enabled or not, in the order Plover has them. """
        if not self._loaded:
            self.read()
        # The config value we need is read as a string, but it must be decoded as a JSON array of objects.
        try:
            value = self._parser[section][self.DICTIONARIES_KEY]
        except KeyError:
            raise SectionMissingError(self._cfg_path, section) from None
        try:
            items = json.loads(value)
        except json.JSONDecodeError as e:
            raise ConfigParseError(self._cfg_path, f'dictionary list is not valid JSON: {e.msg}') from None
        if not isinstance(items, list):
            raise ConfigParseError(self._cfg_path, 'dictionary list is not a JSON array')
        return [self._parse_entry(item) for item in items]

    def _parse_entry(self, item:object) -> DictionaryConfigEntry:
        if not isinstance(item, dict):
            raise ConfigParseError(self._cfg_path, f'dictionary entry {item!r} is not a JSON object')
        enabled = item.get('enabled', True)
        path = item.get('path')
        if not isinstance(enabled, bool) or not isinstance(path, str):
            raise ConfigParseError(self._cfg_path, f'dictionary entry {item!r} needs a bool "enabled" and a str "path"')
        return DictionaryConfigEntry(enabled, path)

    def dictionary_paths(self, section:str=DEFAULT_SECTION, *, home:str=None) -> Iterator[str]:
        """ Yield a full file path for each enabled dictionary, highest precedence first.
            The paths start out either under ~ or relative to the location of the config file. Make them absolute. """
        base_path = os.path.dirname(os.path.abspath(self._cfg_path))
        for entry in self.dictionaries(section):
            if entry.enabled:
                path = expand_tilde(entry.path, home)
                yield os.path.join(base_path, path)
