""" Main module for the HTTP lookup server. """

import sys
from typing import Sequence

from .app import StenoLookup
from .errors import StenoLookupError
from .options import LookupOptions
from .service import build_server


def main(argv:Sequence[str]=None) -> int:
    """ Build the index, then start the server and poll for connections until interrupted. """
    opts = LookupOptions("Run steno lookup as an HTTP server.")
    opts.add("http-addr", "127.0.0.1", "IP address or hostname for server.")
    opts.add("http-port", 8080, "TCP port to listen for connections.")
    opts.add("http-workers", 8, "Number of connections that may be handled at the same time.")
    opts.add("http-timeout", 10.0, "Seconds a stalled client may hold a connection open (0 = no limit).")
    app = StenoLookup(opts, argv=argv)
    logger = app.logger
    log = logger.info
    try:
        index_set = app.index_set
        log("Loading HTTP server...")
        server = build_server(index_set, log, logger.exception,
                              workers=opts.http_workers, timeout=opts.http_timeout)
        try:
            server.start(opts.http_addr, opts.http_port)
        except KeyboardInterrupt:
            pass
        finally:
            server.shutdown()
        log("Server stopped.")
    except (StenoLookupError, OSError) as e:
        logger.error(str(e))
        return 1
    finally:
        logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
