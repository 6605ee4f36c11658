""" Exceptions raised while locating, reading, and parsing dictionaries and Plover configuration. """


class StenoLookupError(Exception):
    """ Base class for every error that should abort building the lookup index. """


class NotFoundError(StenoLookupError):
    """ Raised if a file referenced by the user or by configuration does not exist. """

    kind = "file"

    def __init__(self, path:str) -> None:
        super().__init__(f'{self.kind.capitalize()} not found: {path}')
        self.path = path  # Path that failed to resolve.


class ParseError(StenoLookupError):
    """ Raised if a file exists but its contents are not in the expected format. """

    def __init__(self, path:str, reason:str) -> None:
        super().__init__(f'Could not parse {path}: {reason}')
        self.path = path      # Path of the badly formed file.
        self.reason = reason  # Short description of what was wrong.


class DictionaryNotFoundError(NotFoundError):
    kind = "dictionary"


class DictionaryParseError(ParseError):
    """ Raised on invalid JSON or a JSON value that is not an object of strings to strings. """


class ConfigNotFoundError(NotFoundError):
    kind = "config file"


class ConfigParseError(ParseError):
    """ Raised on a malformed INI file or a malformed dictionary list inside one. """


class SectionMissingError(StenoLookupError):
    """ Raised if the requested config section (or its dictionary list) does not exist. """

    def __init__(self, path:str, section:str) -> None:
        super().__init__(f'No dictionary list in section "{section}" of {path}')
        self.path = path
        self.section = section


class HomeNotFoundError(StenoLookupError):
    """ Raised if a path starts with ~ and there is no way to find the user's home directory. """

    def __init__(self, path:str) -> None:
        super().__init__(f'Cannot expand {path}: home directory not found')
        self.path = path
