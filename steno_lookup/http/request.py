from typing import BinaryIO, Dict, Iterable, List, Optional
from urllib.parse import parse_qs, unquote

from .status import HTTPError

QueryDict = Dict[str, List[str]]  # Every value given for each query parameter, in order.


class HTTPRequestHeaders:
    """ Structure for HTTP headers (other than the request line). """

    def __init__(self, header_map:Dict[str, str]) -> None:
        self._d = header_map  # String mapping with the last header under each unique lowercased name.

    def _get_lower(self, name:str) -> str:
        return self._d.get(name.lower(), "")

    def content_length(self) -> int:
        """ Return the content length in bytes if the header is present; 0 otherwise. """
        try:
            length = int(self._get_lower("Content-Length") or 0)
        except ValueError:
            raise HTTPError.BAD_REQUEST("invalid Content-Length") from None
        if length < 0:
            raise HTTPError.BAD_REQUEST("invalid Content-Length")
        return length

    def expect_continue(self) -> bool:
        """ Return True if the client is expecting a 100 Continue before it sends any more data. """
        return self._get_lower('Expect').lower() == "100-continue"

    def keep_alive(self, default=True) -> bool:
        """ Return True if the connection should be kept alive after this request.
            Without a "close" or "keep-alive" token in the Connection header, return <default>. """
        tokens = {t.strip() for t in self._get_lower('Connection').lower().split(',')}
        if 'close' in tokens:
            return False
        if 'keep-alive' in tokens:
            return True
        return default

    @classmethod
    def from_lines(cls, lines:Iterable[str]) -> "HTTPRequestHeaders":
        """ Parse header lines up to the first one that isn't a header. Names are case-insensitive.
            A later duplicate replaces an earlier one. An indented line continues the value before it. """
        d = {}
        name = None
        for line in lines:
            if line[:1] in (' ', '\t') and name is not None:
                d[name] += ' ' + line.strip()
            elif ':' in line:
                name, value = line.split(':', 1)
                name = name.strip().lower()
                d[name] = value.strip()
            else:
                break
        return cls(d)


class HTTPRequestURI:
    """ Structure representing the parts of an HTTP request URI. """

    def __init__(self, path:str, query:QueryDict, fragment:str) -> None:
        self.path = path          # URI path (everything from the root / to the query ?).
        self.query = query        # URI query (everything from the ? to the #), parsed into lists of strings.
        self.fragment = fragment  # URI fragment (everything after the #).

    @classmethod
    def from_string(cls, s:str) -> "HTTPRequestURI":
        """ Parse a URI from string form, unquoting special characters.
            Escapes are decoded as UTF-8; a query that is not valid UTF-8 is a bad request. """
        fragment = ''
        if '#' in s:
            s, raw_fragment = s.split('#', 1)
            fragment = unquote(raw_fragment)
        query = {}
        if '?' in s:
            s, raw_query = s.split('?', 1)
            try:
                query = parse_qs(raw_query, keep_blank_values=True, errors='strict')
            except (UnicodeDecodeError, ValueError):
                raise HTTPError.BAD_REQUEST("malformed query string") from None
        path = unquote(s)
        return cls(path, query, fragment)


class HTTPRequest:
    """ Structure representing an HTTP/1.x request. """

    def __init__(self, method:str, uri:HTTPRequestURI, headers:HTTPRequestHeaders, content:bytes,
                 version="HTTP/1.1") -> None:
        self.method = method    # HTTP method string (GET, POST, etc.)
        self.uri = uri          # HTTP URI starting from the server root.
        self.headers = headers  # HTTP request headers, unordered, with lowercase keys.
        self.content = content  # The rest of the data read from the HTTP stream, as a byte string.
        self.version = version  # Protocol version string from the request line.

    def keep_alive(self) -> bool:
        """ HTTP/1.1 connections persist unless the client asks to close.
            HTTP/1.0 connections close unless the client asks for keep-alive. """
        return self.headers.keep_alive(default=(self.version != "HTTP/1.0"))

    @property
    def path(self) -> str:
        return self.uri.path

    @property
    def query(self) -> QueryDict:
        return self.uri.query

    def __str__(self) -> str:
        """ Return a summary of the request for a log. """
        return f'{self.method} {self.path}'


class HTTPRequestReader:
    """ Reads HTTP requests one at a time from a binary stream. """

    SUPPORTED_MAJOR_VERSION = 1

    def __init__(self, stream:BinaryIO, max_header_size=65536) -> None:
        self._stream = stream                    # Readable ISO-8859-1 binary stream.
        self._max_header_size = max_header_size  # Maximum combined size of the request line and headers in bytes.

    def read(self) -> Optional[HTTPRequest]:
        """ Read the next request from the stream, including its content.
            If the stream ends before there is any request data at all, return None. """
        lines = self._read_head()
        if not lines:
            return None
        request_line, *header_lines = lines
        method, uri, version = self._split_request_line(request_line)
        if self._major_version(request_line, version) != self.SUPPORTED_MAJOR_VERSION:
            raise HTTPError.HTTP_VERSION_NOT_SUPPORTED(version)
        uri_obj = HTTPRequestURI.from_string(uri)
        headers = HTTPRequestHeaders.from_lines(header_lines)
        content = self._stream.read(headers.content_length())
        return HTTPRequest(method, uri_obj, headers, content, version)

    def _read_head(self) -> List[str]:
        """ Read and decode lines up to the blank line that ends the headers.
            Blank lines before the request line are skipped, as RFC 7230 allows.
            No single read goes more than one byte past the size limit, even if a line never ends. """
        lines = []
        size_left = self._max_header_size
        while True:
            raw = self._stream.readline(size_left + 1)
            if not raw:
                break
            size_left -= len(raw)
            if size_left < 0:
                raise HTTPError.REQUEST_HEADER_FIELDS_TOO_LARGE()
            line = raw.decode('iso-8859-1').rstrip('\r\n')
            if line.strip():
                lines.append(line)
            elif lines:
                break
        return lines

    @staticmethod
    def _split_request_line(request_line:str) -> List[str]:
        parts = request_line.split()
        if len(parts) != 3 or not parts[2].startswith('HTTP/'):
            raise HTTPError.BAD_REQUEST(request_line)
        return parts

    @staticmethod
    def _major_version(request_line:str, version:str) -> int:
        """ Return the major number of an HTTP/<major>.<minor> version string. """
        try:
            major, _ = map(int, version[5:].split('.'))
        except ValueError:
            raise HTTPError.BAD_REQUEST(request_line) from None
        return major
