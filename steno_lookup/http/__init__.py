""" A small threaded HTTP/1.1 server built directly on sockets.

    tcp - Listens for TCP connections and hands each one to a fixed pool of worker threads.
    connect - Reads requests off a connection, dispatches them, and writes responses until the client is done.
    request/response/status - HTTP message structures and their wire format.
    service - Request handler interface and routers by method and path. """
