""" Module for creating and listening to TCP/IP socket connections. """

from concurrent.futures import ThreadPoolExecutor
from io import BufferedReader, RawIOBase
from select import select
import socket
from threading import Event, Lock
from typing import BinaryIO, Callable, Optional, Tuple


class TCPConnection:
    """ Data structure for an open TCP connection (in the server role). """

    def __init__(self, stream:BinaryIO, addr:str, port:int) -> None:
        self.stream = stream  # Raw binary I/O stream.
        self.addr = addr      # Client IP address.
        self.port = port      # Client TCP port.

    def __str__(self) -> str:
        return f'{self.addr}:{self.port}'


class TCPConnectionHandler:
    """ Interface for a handler of incoming TCP client connections. """

    def handle_connection(self, conn:TCPConnection) -> None:
        """ Handle a TCP connection for its entire duration. It will be closed when this method exits. """
        raise NotImplementedError


class _SocketReader(RawIOBase):
    """ Aliases socket reading functions to match I/O methods. """

    def __init__(self, sock:socket.socket) -> None:
        super().__init__()
        self.readinto = sock.recv_into

    def readable(self) -> bool:
        return True


class SocketStream(BufferedReader):
    """ A raw socket connection which sends/receives data as a binary I/O stream.
        The I/O reader is line-buffered; the writer is raw. """

    def __init__(self, sock:socket.socket) -> None:
        super().__init__(_SocketReader(sock))
        self._sock = sock

    def write(self, data:bytes) -> int:
        self._sock.sendall(data)
        return len(data)

    def writable(self) -> bool:
        return True

    def abort(self) -> None:
        """ Shut down both directions from another thread. Any blocked read returns EOF immediately. """
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass

    def close(self) -> None:
        super().close()
        try:
            self._sock.shutdown(socket.SHUT_WR)
        except OSError:
            pass
        self._sock.close()


class TCPServer:
    """ Simple TCP/IP stream server using sockets. Connections are handled one at a time in the polling thread. """

    def __init__(self, handler:TCPConnectionHandler, *, timeout=0.5, backlog=16,
                 conn_timeout:float=None, log:Callable[[str], None]=None) -> None:
        self._handler = handler            # Handler of TCP/IP connections.
        self._timeout = timeout            # Timeout in seconds to poll for new socket connections.
        self._backlog = backlog            # Number of unaccepted connections the OS may queue.
        self._conn_timeout = conn_timeout  # Seconds a client may go without sending anything before it is dropped.
        self._log = log                    # Optional receiver for server status lines.
        self._running = False              # State variable. When set to False, the server stops after its current polling cycle.
        self._ready = Event()              # Set once the socket is listening.
        self.address = None                # Address and port actually bound. Port 0 is replaced with the OS's choice.

    def start(self, address:str, port:int) -> None:
        """ Make a server socket object bound to <address:port> which opens I/O streams for connections.
            Set options to avoid delays on small packets, then bind and activate the socket.
            Poll the socket for connections until another thread calls shutdown(). """
        if self._running:
            raise RuntimeError("Server already running.")
        self._running = True
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
                sock.bind((address, port))
                sock.listen(self._backlog)
                self.address = sock.getsockname()[:2]
                if self._log is not None:
                    self._log("Server started on {}:{}.".format(*self.address))
                self._ready.set()
                while self._running:
                    if self._poll(sock):
                        self.connect(self._accept(sock))
        finally:
            self._running = False
            self._ready.clear()

    def _poll(self, sock:socket.socket) -> bool:
        """ Wait for the timeout and return True if a connection becomes ready for acceptance. """
        try:
            return bool(select([sock], [], [], self._timeout)[0])
        except (InterruptedError, OSError):
            return False

    def _accept(self, sock:socket.socket) -> TCPConnection:
        """ Connect to the client and return an I/O stream along with the client's IP address and TCP port.
            Reads and writes on the stream raise socket.timeout if the client stalls for too long. """
        client_sock, (addr, port, *_) = sock.accept()
        client_sock.settimeout(self._conn_timeout)
        client_sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        stream = SocketStream(client_sock)
        return TCPConnection(stream, addr, port)

    def wait_ready(self, timeout:float=None) -> Optional[Tuple[str, int]]:
        """ Block until the server is listening (or the timeout runs out) and return the bound address. """
        self._ready.wait(timeout)
        return self.address

    def connect(self, conn:TCPConnection) -> None:
        """ Send a newly established TCP connection to the connection handler. Close it when finished. """
        with conn.stream:
            self._handler.handle_connection(conn)

    def shutdown(self) -> None:
        """ Halt serving after the current polling cycle. Must be called by another thread. """
        self._running = False


class PooledTCPServer(TCPServer):
    """ Handles connections on a fixed-size pool of worker threads. The handler must be thread-safe.
        Connections beyond the pool size wait in a queue until a worker is free. """

    def __init__(self, handler:TCPConnectionHandler, *, workers=8, **kwargs) -> None:
        super().__init__(handler, **kwargs)
        self._workers = workers  # Number of connections that may be handled at the same time.
        self._executor = None    # Thread pool. Only exists while the server is running.
        self._streams = set()    # Streams of every connection that has been accepted but not yet closed.
        self._lock = Lock()      # Guards the set of streams.

    def start(self, address:str, port:int) -> None:
        """ Start the worker pool, then serve until shutdown. On the way out, abort any connections still open.
            Workers waiting on idle keep-alive clients get EOF and exit. """
        self._executor = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="http-worker")
        try:
            super().start(address, port)
        finally:
            with self._lock:
                for stream in self._streams:
                    stream.abort()
            self._executor.shutdown(wait=True)
            self._executor = None

    def connect(self, conn:TCPConnection) -> None:
        """ Queue the connection for the next free worker. """
        with self._lock:
            self._streams.add(conn.stream)
        self._executor.submit(self._connect_tracked, conn)

    def _connect_tracked(self, conn:TCPConnection) -> None:
        try:
            super().connect(conn)
        finally:
            with self._lock:
                self._streams.discard(conn.stream)
