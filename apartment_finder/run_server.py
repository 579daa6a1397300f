import logging

from waitress import serve

from apartment_finder import config
from apartment_finder.app import app

logger = logging.getLogger(__name__)


def main():
    logger.info("Starting apartment availability server with Waitress...")
    logger.info(f"Listening on http://{config.HOST}:{config.PORT}")
    serve(app, host=config.HOST, port=config.PORT, threads=config.THREADS)


if __name__ == '__main__':
    main()
