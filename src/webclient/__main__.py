"""Send an HTTP request and print the response.

Usage:
  webclient [options] <url>
  webclient -h | --help
  webclient --version

Options:
  -X <method>       Send a POST request carrying the form data given with -d.
                    Any value selects POST.
  -d <data>         Form data to send, as key=value pairs joined by "&".
  --json <json>     Send a POST request carrying this JSON document. Takes
                    precedence over -X and -d.
  --urlencoded      Send the form data as application/x-www-form-urlencoded
                    instead of as a JSON object.
  --sort-nested     Also sort the keys of nested objects in JSON responses.
  -v --verbose      Show verbose details in the log.
  -h --help         Show this help information.
  --version         Show the version.
"""

import logging
import os
import sys
from typing import List, Optional

from docopt import docopt

from webclient import __version__
from webclient.client import run
from webclient.error import InvalidJSONError, UsageError
from webclient.request import RequestIntent

logger = logging.getLogger(__name__)

_log_handler: Optional[logging.Handler] = None


def main(argv: Optional[List[str]] = None) -> int:
    args = docopt(__doc__, argv=argv, version=f"webclient {__version__}")

    _setup_logging(verbose=args["--verbose"])

    try:
        intent = RequestIntent.from_args(
            args["<url>"],
            method=args["-X"],
            data=args["-d"],
            json=args["--json"],
            urlencoded=args["--urlencoded"],
        )
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except InvalidJSONError as e:
        # Nothing has been sent yet; a document we cannot parse is fatal.
        print(f"error: {e}", file=sys.stderr)
        return 1

    status = run(intent, sort_nested=args["--sort-nested"])
    logger.info("request to %s finished with status %s", intent.url, status)
    return 0


def _setup_logging(verbose: bool):
    global _log_handler

    if not os.getenv("NO_COLOR"):
        logging.addLevelName(logging.WARNING, "\033[1;33mWARN\033[1;0m")
        logging.addLevelName(logging.ERROR, "\033[1;31mERROR\033[1;0m")

    logger = logging.getLogger()
    if verbose:
        logger.setLevel(logging.DEBUG)
        fmt = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
        logging.getLogger("httpx").disabled = False
    else:
        logger.setLevel(logging.WARNING)
        fmt = "%(asctime)s [%(levelname)s] %(message)s"
        logging.getLogger("httpx").disabled = True

    if _log_handler is not None:
        logger.removeHandler(_log_handler)
    log_formatter = logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")
    _log_handler = logging.StreamHandler(sys.stderr)
    _log_handler.setFormatter(log_formatter)
    logger.addHandler(_log_handler)


if __name__ == "__main__":
    sys.exit(main())
