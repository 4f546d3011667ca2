"""HTTP session settings and file write helpers for data fetching."""

import argparse
import contextlib
import logging
import pathlib

import requests


# Reusable command line arguments for data fetching.
argument_parser = argparse.ArgumentParser(add_help=False)
argument_group = argument_parser.add_argument_group("data fetching")
argument_group.add_argument("--debug_http", action="store_true")

logger = logging.getLogger("wastewater.fetch_policy")


def new_session(args):
    """Returns a new Session configured per supplied command line args.

    The hygiene-monitor API is queried with POST, which HTTP caches never
    store, so each run fetches fresh data.
    """

    if args.debug_http:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)

    session = requests.Session()
    logger.debug("New HTTP session.")
    return session


@contextlib.contextmanager
def temp_to_rename(path, mode=None):
    """Yields a temp file (or path) next to path, renamed into place on exit."""

    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.parent / ("tmp." + path.name)
    try:
        if mode:
            encoding = None if "b" in mode else "utf-8"
            with temp_path.open(mode=mode, encoding=encoding) as file:
                yield file
        else:
            yield temp_path
        temp_path.replace(path)
    finally:
        temp_path.unlink(missing_ok=True)
