""" Module for user-configurable command-line options. """

import os
import sys
from typing import Any, Callable, Iterable, List, Sequence, Tuple

ArgSplit = Tuple[Sequence[str], Sequence[str]]  # Arguments an option takes, and the ones it leaves behind.


class CmdlineArgument:
    """ Abstract class for one kind of argument from the command line, reachable by one or more keys. """

    keys = ()  # Every command-line string that selects this argument.

    def take(self, args:Sequence[str]) -> ArgSplit:
        """ Split the space-delimited strings after a key into the ones this argument uses and the leftovers. """
        return args, ()

    def __call__(self, *args:str) -> Any:
        """ Return a final value for this argument based on the strings it took. """
        raise NotImplementedError

    def combine(self, old:Any, new:Any) -> Any:
        """ Return the value for a key given more than once. Normally the last one wins. """
        return new

    def usage(self) -> str:
        return "|".join(self.keys)

    def description(self) -> str:
        raise NotImplementedError


class CmdlineOption(CmdlineArgument):
    """ An option holding exactly one value, converted from a string by <converter> (usually its type). """

    def __init__(self, key:str, desc="No description.", converter:Callable[[str], Any]=str) -> None:
        self.keys = (key,)
        self._desc = desc            # Optional description to be displayed in help.
        self._converter = converter  # Callable that parses the value string.

    def take(self, args:Sequence[str]) -> ArgSplit:
        return args[:1], args[1:]

    def __call__(self, *args:str) -> Any:
        if len(args) != 1:
            raise ValueError(f'Option {self.keys[0]} takes exactly one argument, got {len(args)}.')
        return self._converter(args[0])

    def usage(self) -> str:
        return f'{super().usage()}=<{getattr(self._converter, "__name__", "value")}>'

    def description(self) -> str:
        return self._desc


class CmdlineFlag(CmdlineOption):
    """ A switch that is turned on just by being present. It may also be set explicitly with --key=false. """

    TRUE_STRINGS = {"1", "true", "yes", "on"}

    def __init__(self, key:str, desc="No description.") -> None:
        super().__init__(key, desc, bool)

    def take(self, args:Sequence[str]) -> ArgSplit:
        return (), args

    def __call__(self, *args:str) -> bool:
        if len(args) > 1:
            raise ValueError(f'Option {self.keys[0]} takes at most one argument, got {len(args)}.')
        return not args or args[0].lower() in self.TRUE_STRINGS

    def usage(self) -> str:
        return "|".join(self.keys)


class CmdlineList(CmdlineOption):
    """ An option that collects one string per occurrence. Repeat the key to add more. """

    def __call__(self, *args:str) -> Any:
        if len(args) != 1:
            raise ValueError(f'Option {self.keys[0]} takes exactly one argument, got {len(args)}.')
        return self._converter(args)

    def combine(self, old:Any, new:Any) -> Any:
        return self._converter([*old, *new])

    def usage(self) -> str:
        return "|".join(self.keys) + '=<str> ...'


class CmdlineHelp(CmdlineArgument):
    """ Generates command-line usage messages and argument help strings. """

    keys = ('-h', '--help')

    def __init__(self, opts:Iterable[CmdlineArgument], script_name:str, app_description:str,
                 *, file=None, max_col_width=32) -> None:
        self._opts = [*opts, self]               # Options to format (including this one).
        self._script_name = script_name          # Program name as run from the command line.
        self._app_description = app_description  # A short description of what the program does.
        self._file = file or sys.stdout          # Output stream for help text (standard output by default).
        self._max_col_width = max_col_width      # Maximum width of keys column in characters.

    def take(self, args:Sequence[str]) -> ArgSplit:
        return (), args

    def format_help(self) -> str:
        """ Return the description, a usage line, and one or two lines for every option. """
        usage = " ".join([f'usage: {self._script_name}', *[f'[{opt.usage()}]' for opt in self._opts]])
        lines = [self._app_description, usage, ""]
        keylists = [", ".join(opt.keys) for opt in self._opts]
        col_width = max([w for w in map(len, keylists) if w < self._max_col_width], default=0) + 2
        for opt, keys in zip(self._opts, keylists):
            if len(keys) <= col_width:
                lines.append(keys.ljust(col_width) + opt.description())
            else:
                lines += [keys, '    ' + opt.description()]
        lines.append("")
        return "\n".join(lines)

    def __call__(self, *args:str) -> None:
        """ Disregard any arguments. Write the help text to the stream and exit the program. """
        self._file.write(self.format_help())
        sys.exit(0)

    def description(self) -> str:
        return "Show this help message and exit."


class CmdlineParser:
    """ Sorts command-line arguments into option values and leftovers. """

    def __init__(self) -> None:
        self._attrs = {}  # Destination attribute name and option object, keyed by every option string.

    def add_option(self, attr:str, opt:CmdlineArgument) -> None:
        for k in opt.keys:
            self._attrs[k] = attr, opt

    def parse(self, argv:Iterable[str]) -> Tuple[dict, List[str]]:
        """
        Parse arguments into a dict of option values and return it with a list of leftovers.
        Option keys start with '-'. A value may be attached to its key with '=' (only the first '=' counts).
        Arguments up to the next key belong to the one before, but only as many as the option takes;
        the rest are leftovers, as are arguments before the first key and keys nobody recognizes. In

            test --dict=a.json word --dict b.json --noconfig --http-port=80

        the leftovers are "test" and "word", --dict collects a.json and b.json, --noconfig gets no args,
        and --http-port gets one. A repeated key is merged with its earlier value by the option.
        """
        values = {}
        extras = []
        groups = [extras]
        for s in argv:
            if s.startswith('-'):
                groups.append([])
            groups[-1].append(s)
        for s, *args in groups[1:]:
            key, *attached = s.split('=', 1)
            if key not in self._attrs:
                extras += [s, *args]
                continue
            attr, opt = self._attrs[key]
            used, rest = opt.take([*attached, *args])
            if attached and not used:
                # An attached value always belongs to the option, even one that normally takes nothing.
                used, rest = attached, args
            value = opt(*used)
            if attr in values:
                value = opt.combine(values[attr], value)
            values[attr] = value
            extras += rest
        return values, extras


class CmdlineOptions:
    """ Namespace class for command-line options. Option values are accessed as instance attributes.
        Unparsed options will fall back to default values. Leftover arguments are kept in <extras>. """

    def __init__(self, app_description="Command line application.") -> None:
        self._app_description = app_description  # App description shown in command-line help.
        self._options = {}  # Contains all option objects keyed by their destination attributes.
        self.extras = []    # Positional and unrecognized arguments from the last parse.

    def __getattr__(self, name:str) -> Any:
        raise AttributeError(f'"{name}" is not the name of a valid command-line option.')

    def add(self, name:str, default:Any=None, desc="No description.") -> None:
        """ Add a new option and set its attribute to be the default value (until parsed).
            The kind of option depends on the type of the default. Hyphens become underscores in attributes. """
        key = "--" + name
        if isinstance(default, bool):
            opt = CmdlineFlag(key, desc)
        elif isinstance(default, (list, tuple, set)):
            opt = CmdlineList(key, desc, type(default))
        else:
            opt = CmdlineOption(key, desc, str if default is None else type(default))
        attr_name = name.replace("-", "_")
        self._options[attr_name] = opt
        setattr(self, attr_name, default)

    def _help(self, script:str) -> CmdlineHelp:
        return CmdlineHelp(self._options.values(), script, self._app_description)

    def help_text(self, script="") -> str:
        return self._help(script).format_help()

    def parse(self, argv:Sequence[str]=None) -> None:
        """ Parse options from <argv> if provided, otherwise from sys.argv, into instance attributes.
            The first argument is the script name, which only appears in help. """
        script, *args = (sys.argv if argv is None else argv) or [""]
        parser = CmdlineParser()
        for attr, opt in self._options.items():
            parser.add_option(attr, opt)
        # The help option's attribute is a dummy name; calling it exits before any value is stored.
        parser.add_option("_help", self._help(os.path.basename(script)))
        values, self.extras = parser.parse(args)
        self.__dict__.update(values)
