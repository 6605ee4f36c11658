import email.utils
from typing import BinaryIO, Iterator

from .status import HTTPError, HTTPResponseStatus, HTTPStatusMeta


class HTTPResponseHeaders:
    """ Structure for HTTP response headers (other than the status line). """

    # Ordered list of response headers. General headers are first, entity headers are last.
    HEADER_TYPES = ['Date', 'Server', 'Connection', 'Content-Type', 'Content-Length']

    def __init__(self) -> None:
        self._d = {}  # String dict with each header.

    def set_date(self, timeval:float=None) -> None:
        self._d["Date"] = email.utils.formatdate(timeval, usegmt=True)

    def set_server(self, server:str) -> None:
        self._d["Server"] = server

    def set_connection_close(self) -> None:
        self._d["Connection"] = "close"

    def set_keep_alive(self) -> None:
        self._d["Connection"] = "keep-alive"

    def set_content_type(self, mime_type:str) -> None:
        self._d["Content-Type"] = mime_type

    def set_content_length(self, length:int) -> None:
        self._d["Content-Length"] = str(length)

    def iter_lines(self) -> Iterator[str]:
        """ Yield each header line in order. """
        d = self._d
        for k in self.HEADER_TYPES:
            if k in d:
                yield f'{k}: {d[k]}'


class HTTPResponse(metaclass=HTTPStatusMeta):
    """ Class representing the outcome of an HTTP/1.1 request with a status line, headers, and/or content.
        HTTPResponse.OK(content=b'...', ctype='text/plain') creates a response with status 200. """

    def __init__(self, status:HTTPResponseStatus, headers:HTTPResponseHeaders=None, content=b'', *,
                 ctype:str=None) -> None:
        """ If there is content, the headers describing it are added automatically. """
        self.status = status
        self.headers = headers or HTTPResponseHeaders()
        self.content = content
        if ctype is not None:
            self.headers.set_content_type(ctype)
        if content:
            self.headers.set_content_length(len(content))

    @classmethod
    def from_error(cls, e:HTTPError) -> "HTTPResponse":
        """ Create an error response. This closes the connection. """
        status = e.status
        headers = HTTPResponseHeaders()
        headers.set_connection_close()
        if not status.has_body():
            return cls(status, headers)
        html_text = status.error_html(*e.args)
        content = html_text.encode('utf-8', 'replace')
        return cls(status, headers, content, ctype='text/html; charset=utf-8')

    def __str__(self) -> str:
        """ Return a summary of the response for a log. """
        return str(self.status)


class HTTPResponseWriter:
    """ Writes HTTP response headers and content to a binary stream. """

    def __init__(self, stream:BinaryIO) -> None:
        self._stream = stream  # Writable ISO-8859-1 binary stream.

    def write(self, response:HTTPResponse, *, head=False) -> None:
        """ Write the status line, headers, and blank line endings to the ISO-8859-1 binary stream.
            The content follows unless this was a response to a HEAD request. """
        status = response.status
        header_lines = [status.header(), *response.headers.iter_lines(), "", ""]
        header_data = "\r\n".join(header_lines).encode('iso-8859-1', 'strict')
        self._stream.write(header_data)
        if response.content and not head and status.has_body():
            self._stream.write(response.content)
        self._stream.flush()
