""" Contains the request handler interface and the routing tables that pick a handler for each request. """

from typing import Dict, Mapping

from .request import HTTPRequest
from .response import HTTPResponse
from .status import HTTPError


class HTTPRequestHandler:
    """ Interface for an HTTP data processor that creates a response object from a request object.
        A single handler may serve many worker threads at once, so it must not keep per-request state. """

    def __call__(self, request:HTTPRequest) -> HTTPResponse:
        raise NotImplementedError


class HTTPRouter(HTTPRequestHandler):
    """ Abstract table of request handlers, keyed by one part of the request. """

    def __init__(self, routes:Mapping[str, HTTPRequestHandler]=None) -> None:
        self._table:Dict[str, HTTPRequestHandler] = {}
        for key, handler in (routes or {}).items():
            self.add_route(key, handler)

    def add_route(self, key:str, handler:HTTPRequestHandler) -> None:
        self._table[key] = handler

    def route_key(self, request:HTTPRequest) -> str:
        raise NotImplementedError

    def unrouted(self, key:str) -> HTTPError:
        """ Return the error to raise when nothing is registered under <key>. """
        raise NotImplementedError

    def __call__(self, request:HTTPRequest) -> HTTPResponse:
        key = self.route_key(request)
        try:
            handler = self._table[key]
        except KeyError:
            raise self.unrouted(key) from None
        return handler(request)


class HTTPMethodRouter(HTTPRouter):
    """ Routes by method name, case-insensitive. Methods nobody handles are 501 Not Implemented.
        A GET route also answers HEAD unless HEAD has a route of its own. Content is never written for HEAD,
        so the result is the same status and headers with an empty body. """

    def add_route(self, method:str, handler:HTTPRequestHandler) -> None:
        method = method.upper()
        super().add_route(method, handler)
        if method == "GET":
            self._table.setdefault("HEAD", handler)

    def route_key(self, request:HTTPRequest) -> str:
        return request.method.upper()

    def unrouted(self, method:str) -> HTTPError:
        return HTTPError.NOT_IMPLEMENTED(method)


class HTTPPathRouter(HTTPRouter):
    """ Routes by exact URI path. Query strings are not part of the path. Unknown paths are 404 Not Found. """

    def route_key(self, request:HTTPRequest) -> str:
        return request.path

    def unrouted(self, path:str) -> HTTPError:
        return HTTPError.NOT_FOUND(path)
