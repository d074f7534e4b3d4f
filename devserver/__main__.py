import argparse
import logging

from tornado import ioloop

from devserver.docserver import DOCUMENTS_PATH, make_app

logger = logging.getLogger('devserver')


def main(port: int):
    app = make_app()
    app.listen(port)
    logger.info("Serving parking lot documents on http://localhost:{}{}".format(port, DOCUMENTS_PATH))
    ioloop.IOLoop.current().start()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Parking lots document server for development.')
    parser.add_argument("--port", type=int, default=8888, help="Port to listen on")
    args: argparse.Namespace = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    main(args.port)
