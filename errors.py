import logging
from enum import Enum

logger = logging.getLogger(__name__)

error_counter = {}


class ErrorKind(Enum):
    USAGE = "usage_error"
    INPUT_OPEN = "input_open_failure"
    MALFORMED_RECORD = "malformed_record"
    EMPTY_NETWORK = "empty_network"
    OUTPUT_WRITE = "output_write_failure"


class NetworkError(Exception):
    """Fatal error raised while reading, parsing, building or writing a network.

    Nothing catches these below the command line driver.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message
        error_counter[kind.value] = error_counter.get(kind.value, 0) + 1
        logger.debug(f"[NetworkError] {kind.value}: {message} (count: {error_counter[kind.value]})")

    def __str__(self):
        return f"[{self.kind.value}] {self.message}"


def malformed(message: str) -> NetworkError:
    return NetworkError(ErrorKind.MALFORMED_RECORD, message)
