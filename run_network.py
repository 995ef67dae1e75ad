#!/usr/bin/env python3
"""
Generate the social network HTML pages from a user list file
"""
import logging
import sys

from errors import ErrorKind, NetworkError, error_counter
from html_pages import write_site
from network import read_network
from network_utils import summarize

DEBUG = False
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

USAGE = "Usage: python run_network.py <input_file> [output_dir]"

logger = logging.getLogger(__name__)


def run_network(input_file, output_dir="."):
    network = read_network(input_file)
    paths = write_site(network, output_dir)
    logger.info(f"Network summary: {summarize(network)}")
    return paths


def main(argv) -> int:
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO, format=LOG_FORMAT)
    try:
        if len(argv) < 1:
            print(USAGE, file=sys.stderr)
            print("Example: python run_network.py users.json site/", file=sys.stderr)
            raise NetworkError(ErrorKind.USAGE, "invalid number of arguments provided")

        input_file = argv[0]
        output_dir = argv[1] if len(argv) > 1 else "."
        run_network(input_file, output_dir)
    except NetworkError as e:
        logger.error(str(e))
        logger.debug(f"Errors by kind: {dict(error_counter)}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
