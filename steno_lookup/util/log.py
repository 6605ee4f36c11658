from itertools import islice
import logging
from threading import Lock
from traceback import TracebackException
from typing import TextIO


class SystemLogger:
    """ Wrapper for a standard library logger that writes status lines and exception tracebacks. """

    _FORMATTER = logging.Formatter('[%(asctime)s]: %(message)s', "%b %d %Y %H:%M:%S")
    _TB_MAX_LINES = 50

    def __init__(self, name="steno_lookup", level=logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._last_info = ""  # Most recently logged info string.
        self._lock = Lock()   # Guards the last info string when many connection threads log at once.

    def add_stream(self, stream:TextIO=None) -> None:
        """ Log to a text stream (stderr by default). """
        stream_handler = logging.StreamHandler(stream)
        self._attach_handler(stream_handler)

    def add_file(self, filename:str, **kwargs) -> None:
        """ Append to a UTF-8 log file. """
        file_handler = logging.FileHandler(filename, encoding='utf-8', **kwargs)
        self._attach_handler(file_handler)

    def _attach_handler(self, handler:logging.Handler) -> None:
        handler.setFormatter(self._FORMATTER)
        self._logger.addHandler(handler)

    def close(self) -> None:
        """ Detach and close every handler. Loggers are global, so this keeps tests from leaking streams. """
        for handler in self._logger.handlers[:]:
            self._logger.removeHandler(handler)
            handler.close()

    def info(self, info:str) -> None:
        """ Log a basic info event. Omit details if identical to the last info event. """
        with self._lock:
            if info == self._last_info:
                info = "*"
            else:
                self._last_info = info
        self._logger.info('%s', info)

    def error(self, message:str) -> None:
        self._logger.error('%s', message)

    def exception(self, exc:BaseException) -> str:
        """ Log an exception as an error and return the formatted traceback. """
        tb_text = self._format_traceback(exc)
        try:
            self._logger.error('EXCEPTION\n%s', tb_text)
        except Exception as e:
            # stderr might be closed or redirected. There may be other handlers, so keep going.
            tb_text += f'\nFAILED TO WRITE LOG\n{self._format_traceback(e)}'
        return tb_text

    def _format_traceback(self, exc:BaseException, **kwargs) -> str:
        """ Perform custom formatting of a traceback and return a string. """
        tb = TracebackException.from_exception(exc, **kwargs)
        return "".join(islice(tb.format(), self._TB_MAX_LINES))


def open_logger(*filenames:str, to_stderr=True, **kwargs) -> SystemLogger:
    """ Open a logger that appends to text files and/or prints to stderr. """
    logger = SystemLogger(**kwargs)
    for f in filenames:
        logger.add_file(f)
    if to_stderr:
        logger.add_stream()
    return logger
