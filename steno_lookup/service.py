""" HTTP request handlers for stroke lookup, and the server built around them. """

import json
import sys

from . import __version__
from .http.connect import ExceptionLogger, HTTPConnectionHandler, LineLogger
from .http.request import HTTPRequest, QueryDict
from .http.response import HTTPResponse
from .http.service import HTTPMethodRouter, HTTPPathRouter, HTTPRequestHandler
from .http.status import HTTPError
from .http.tcp import PooledTCPServer
from .index import IndexSet

SERVER_VERSION = f"steno-lookup/{__version__} Python/{sys.version.split()[0]}"
IDENTIFICATION = f"steno-lookup {__version__}"


class TextService(HTTPRequestHandler):
    """ Always answers with the same plain text. """

    def __init__(self, text:str) -> None:
        self._content = text.encode('utf-8')

    def __call__(self, request:HTTPRequest) -> HTTPResponse:
        return HTTPResponse.OK(content=self._content, ctype='text/plain; charset=utf-8')


class LookupService(HTTPRequestHandler):
    """ Answers GET /lookup?q=<translation> with a JSON array of every stroke for that translation.

        The search term is parsed out of the query first. A missing term fails right there with 400 Bad Request
        and never reaches the index. No matches is still a success; the answer is just an empty array.

        The index set is never modified after construction, so one instance serves every worker thread. """

    CTYPE = "application/json; charset=utf-8"
    QUERY_KEY = "q"

    def __init__(self, index_set:IndexSet) -> None:
        self._index_set = index_set  # Shared read-only index. The only state this service has.

    def __call__(self, request:HTTPRequest) -> HTTPResponse:
        term = self.parse(request.query)
        strokes = self._index_set.lookup(term)
        return self.respond(strokes)

    def parse(self, query:QueryDict) -> str:
        """ Return the one and only search term in a query. An empty term is valid; it usually finds nothing. """
        values = query.get(self.QUERY_KEY)
        if not values:
            raise HTTPError.BAD_REQUEST(f'missing query parameter "{self.QUERY_KEY}"')
        if len(values) > 1:
            raise HTTPError.BAD_REQUEST(f'query parameter "{self.QUERY_KEY}" given more than once')
        return values[0]

    def respond(self, strokes) -> HTTPResponse:
        """ Encode the strokes as a JSON array. ensure_ascii=False keeps Unicode symbols intact. """
        data = json.dumps(list(strokes), ensure_ascii=False).encode('utf-8')
        return HTTPResponse.OK(content=data, ctype=self.CTYPE)


def build_dispatcher(index_set:IndexSet, log:LineLogger, log_exception:ExceptionLogger=None) -> HTTPConnectionHandler:
    """ Build an HTTP connection handler with every route the lookup server has.
        The method router answers HEAD with the GET routes. """
    path_router = HTTPPathRouter({"/": TextService(IDENTIFICATION),
                                  "/lookup": LookupService(index_set)})
    method_router = HTTPMethodRouter({"GET": path_router})
    return HTTPConnectionHandler(method_router, log, log_exception=log_exception, server_version=SERVER_VERSION)


def build_server(index_set:IndexSet, log:LineLogger, log_exception:ExceptionLogger=None, *,
                 workers=8, timeout=10.0) -> PooledTCPServer:
    """ Build a server that handles up to <workers> connections at once, all sharing <index_set>.
        A client that sends nothing for <timeout> seconds is disconnected to free its worker. Zero means never. """
    dispatcher = build_dispatcher(index_set, log, log_exception)
    conn_timeout = timeout if timeout > 0 else None
    return PooledTCPServer(dispatcher, workers=workers, conn_timeout=conn_timeout, log=log)
