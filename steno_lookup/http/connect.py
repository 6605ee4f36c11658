""" Module for servicing HTTP connections and requests using I/O streams. """

import socket
from typing import BinaryIO, Callable, Iterator, Optional

from .request import HTTPRequest, HTTPRequestReader
from .response import HTTPResponse, HTTPResponseWriter
from .service import HTTPRequestHandler
from .status import HTTPError
from .tcp import TCPConnection, TCPConnectionHandler

LineLogger = Callable[[str], None]                 # Writes one line of text to a log.
ExceptionLogger = Callable[[BaseException], object]  # Writes an exception traceback to a log.


class HTTPConnectionHandler(TCPConnectionHandler):
    """ Handles TCP connections by dispatching HTTP requests to a request handler.
        Each connection may be handled on its own thread, so this class is thread-safe
        to the extent that the request handler and loggers are. """

    def __init__(self, req_handler:HTTPRequestHandler, log:LineLogger, *,
                 log_exception:ExceptionLogger=None, server_version:str=None) -> None:
        self._req_handler = req_handler        # Handler for all HTTP requests. May delegate to subhandlers.
        self._log = log                        # Receives one line for every transaction and connection event.
        self._log_exception = log_exception    # Optional logger for unexpected exception tracebacks.
        self._server_version = server_version  # Optional server version string sent with each response.

    def handle_connection(self, conn:TCPConnection) -> None:
        """ Process all HTTP requests on an open TCP stream and write log messages until close. """
        prefix = f'{conn} - '
        def log(message:str) -> None:
            self._log(prefix + message)
        self.handle_stream(conn.stream, log)

    def handle_stream(self, stream:BinaryIO, log:LineLogger) -> None:
        """ Process requests on a stream from any source. The stream is not closed here. """
        try:
            for s in self._process(stream):
                log(s)
        except socket.timeout:
            log("Connection timed out.")
        except OSError:
            log("Connection aborted by OS.")
        except HTTPError as e:
            log(f"Connection closed by error: {e}")
        except Exception as e:
            log("Connection closed by exception.")
            if self._log_exception is not None:
                self._log_exception(e)

    def _process(self, stream:BinaryIO) -> Iterator[str]:
        """ Process requests and yield log messages until connection close or error. """
        reader = HTTPRequestReader(stream)
        writer = HTTPResponseWriter(stream)
        while True:
            request = None
            try:
                request = reader.read()
                if request is None:
                    return
                # Examine the headers and look for continue directives first.
                headers = request.headers
                if headers.expect_continue():
                    self._send(HTTPResponse.CONTINUE(), writer)
                response = self._req_handler(request)
                keep_alive = request.keep_alive()
                if not keep_alive:
                    response.headers.set_connection_close()
                elif request.version == "HTTP/1.0":
                    response.headers.set_keep_alive()
                yield self._send(response, writer, request)
                if not keep_alive:
                    return
            except HTTPError as e:
                yield self._send(HTTPResponse.from_error(e), writer, request)
                raise
            except OSError:
                raise
            except Exception:
                # For non-HTTP exceptions, send an internal error response and reraise to log the traceback.
                yield self._send(HTTPResponse.from_error(HTTPError()), writer, request)
                raise

    def _send(self, response:HTTPResponse, writer:HTTPResponseWriter, request:Optional[HTTPRequest]=None) -> str:
        """ Add server-specific headers to a response and write it.
            Return a summary of the transaction for the log. """
        headers = response.headers
        headers.set_date()
        if self._server_version is not None:
            headers.set_server(self._server_version)
        head = request is not None and request.method.upper() == "HEAD"
        writer.write(response, head=head)
        if request is None:
            return f'BAD REQUEST -> {response}'
        return f'{request} -> {response}'
