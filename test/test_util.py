""" Unit tests for general-purpose utilities. """

import io
import os

import pytest

from steno_lookup.errors import HomeNotFoundError
from steno_lookup.util.cmdline import CmdlineOptions
from steno_lookup.util.log import SystemLogger
from steno_lookup.util.path import expand_tilde, home_directory

posix_only = pytest.mark.skipif(os.sep != "/", reason="Expected paths are written with POSIX separators.")


@posix_only
@pytest.mark.parametrize("path, home, expected", [
    ("~",             "/home/steno", "/home/steno"),
    ("~/",            "/home/steno", "/home/steno"),
    ("~/main.json",   "/home/steno", "/home/steno/main.json"),
    ("~/a/b.json",    "/home/steno", "/home/steno/a/b.json"),
    ("~/main.json",   "/",           "/main.json"),
    ("~",             "/",           "/"),
    ("/abs/b.json",   "/home/steno", "/abs/b.json"),
    ("rel/c.json",    "/home/steno", "rel/c.json"),
    ("~other/d.json", "/home/steno", "~other/d.json"),
    ("dir/~/e.json",  "/home/steno", "dir/~/e.json"),
])
def test_expand_tilde(path, home, expected) -> None:
    assert expand_tilde(path, home) == expected


def test_expand_tilde_no_home(monkeypatch) -> None:
    """ If the home directory can't be found, only paths that need it fail. """
    monkeypatch.setattr(os.path, "expanduser", lambda p: p)
    with pytest.raises(HomeNotFoundError):
        home_directory()
    with pytest.raises(HomeNotFoundError) as exc_info:
        expand_tilde("~/main.json")
    assert exc_info.value.path == "~/main.json"
    assert expand_tilde("main.json") == "main.json"


def _options() -> CmdlineOptions:
    opts = CmdlineOptions("Test application.")
    opts.add("name", "default", "A string.")
    opts.add("count", 3, "An integer.")
    opts.add("flag", False, "A switch.")
    opts.add("files", [], "Several strings.")
    opts.add("with-hyphen", "", "A string with a hyphenated key.")
    return opts


def test_cmdline_defaults() -> None:
    opts = _options()
    opts.parse(["script.py"])
    assert opts.name == "default"
    assert opts.count == 3
    assert opts.flag is False
    assert opts.files == []
    assert opts.with_hyphen == ""
    assert opts.extras == []
    with pytest.raises(AttributeError):
        opts.not_an_option


def test_cmdline_values() -> None:
    opts = _options()
    opts.parse(["/path/to/script.py", "first", "--name=new", "--count=10", "--flag",
                "--files=a.json", "second", "--files", "b.json", "--with-hyphen=x=y"])
    assert opts.name == "new"
    assert opts.count == 10
    assert opts.flag is True
    assert opts.files == ["a.json", "b.json"]
    assert opts.with_hyphen == "x=y"
    assert opts.extras == ["first", "second"]


def test_cmdline_repeated_keys() -> None:
    """ List options collect every occurrence in order. Other options keep the last value. """
    opts = _options()
    opts.parse(["script.py", "--files=c.json", "--name=a", "--files=a.json", "--name=b", "--files", "b.json"])
    assert opts.files == ["c.json", "a.json", "b.json"]
    assert opts.name == "b"
    assert opts.extras == []

def test_cmdline_extras() -> None:
    """ Arguments that no option takes are kept in order. Unknown options are too. """
    opts = _options()
    opts.parse(["script.py", "--flag", "good", "--name=n", "morning", "--unknown", "world"])
    assert opts.flag is True
    assert opts.name == "n"
    assert opts.extras == ["good", "morning", "--unknown", "world"]


@pytest.mark.parametrize("arg, expected", [("--flag=true", True), ("--flag=1", True), ("--flag=ON", True),
                                           ("--flag=false", False), ("--flag=0", False)])
def test_cmdline_flag_values(arg, expected) -> None:
    opts = _options()
    opts.parse(["script.py", arg])
    assert opts.flag is expected


def test_cmdline_bad_type() -> None:
    opts = _options()
    with pytest.raises(ValueError):
        opts.parse(["script.py", "--count=many"])


def test_cmdline_help(capsys) -> None:
    opts = _options()
    text = opts.help_text("script.py")
    assert text.startswith("Test application.\nusage: script.py")
    for key in ("--name", "--count", "--flag", "--files", "--with-hyphen", "--help"):
        assert key in text
    with pytest.raises(SystemExit) as exc_info:
        opts.parse(["script.py", "--help"])
    assert exc_info.value.code == 0
    assert "A switch." in capsys.readouterr().out


def test_logger() -> None:
    """ Repeated info messages are shortened. Tracebacks are returned as well as logged. """
    stream = io.StringIO()
    logger = SystemLogger("steno_lookup.test")
    logger.add_stream(stream)
    try:
        logger.info("Loading...")
        logger.info("Loading...")
        logger.info("Done.")
        logger.error("Something failed.")
        try:
            raise ValueError("bad value")
        except ValueError as e:
            tb_text = logger.exception(e)
    finally:
        logger.close()
    lines = stream.getvalue().splitlines()
    assert lines[0].endswith("]: Loading...")
    assert lines[1].endswith("]: *")
    assert lines[2].endswith("]: Done.")
    assert lines[3].endswith("]: Something failed.")
    assert lines[0].startswith("[")
    assert "ValueError: bad value" in tb_text
    assert "ValueError: bad value" in stream.getvalue()
    # Nothing is written after close.
    logger.info("Gone.")
    assert "Gone." not in stream.getvalue()


def test_logger_file(tmp_path) -> None:
    path = tmp_path / "status.log"
    logger = SystemLogger("steno_lookup.test_file")
    logger.add_file(str(path))
    logger.info("Ünïcode status")
    logger.close()
    assert "Ünïcode status" in path.read_text(encoding='utf-8')
