"""Logging setup shared by command line entry points (initialized on import)."""

import argparse
import logging
import sys
import warnings

argument_parser = argparse.ArgumentParser(add_help=False)
argument_group = argument_parser.add_argument_group("logging")
argument_group.add_argument("--quiet", action="store_true")
argument_group.add_argument("--debug", action="store_true")


# Highest threshold first; INFO gets no marker.
_LEVEL_MARKERS = [
    (logging.CRITICAL, "💥  "),
    (logging.ERROR, "🔥  "),
    (logging.WARNING, "⚠️   "),
    (logging.INFO, ""),
]


def _level_marker(levelno):
    for threshold, marker in _LEVEL_MARKERS:
        if levelno >= threshold:
            return marker
    return "🕸  "


class _LogFormatter(logging.Formatter):
    """Keeps leading/trailing whitespace of the message around the prefix."""

    def format(self, record):
        message = record.getMessage()
        body = message.strip()
        lead = message[: len(message) - len(message.lstrip())]
        trail = message[len(message.rstrip()) :]

        if record.name != "root":
            body = f"{record.name}: {body}"
        body = _level_marker(record.levelno) + body

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        extras = [t for t in (record.exc_text, record.stack_info) if t]
        return lead + "\n".join([body.strip()] + extras) + trail


def _sys_exception_hook(exc_type, exc_value, exc_tb):
    if issubclass(exc_type, KeyboardInterrupt):
        logging.critical("*** KeyboardInterrupt (^C)! ***")
    else:
        exc_info = (exc_type, exc_value, exc_tb)
        logging.critical("Uncaught exception", exc_info=exc_info)


def _warning_hook(message, category, filename, lineno, file=None, line=None):
    logging.warning(str(message).strip())


def apply_args(args):
    """Adjusts the root log level per --quiet / --debug."""

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.WARNING)


# Initialize on import.
_log_handler = logging.StreamHandler(stream=sys.stdout)
_log_handler.setFormatter(_LogFormatter())
logging.basicConfig(level=logging.INFO, handlers=[_log_handler])
sys.excepthook = _sys_exception_hook
warnings.showwarning = _warning_hook
