"""Module to fetch wastewater samples from the hygiene-monitor open data API.

Samples are kept in one JSON file which is extended incrementally: only
dates after the latest stored extraction_date are requested.
"""

import json
import logging
import pathlib

import pandas

from wastewater import fetch_policy
from wastewater.sample_data import parse_date

DATA_URL = (
    "https://api.hygiene-monitor.de/openData/getCovidOpenDataByDateRange"
)

FIRST_DATE = pandas.Timestamp(2022, 2, 1)

logger = logging.getLogger("wastewater.fetch_hygiene_monitor")


def get_samples(session, start, end):
    """Returns sample objects (dicts) extracted from start to end."""

    request = {
        "extraction_date_start": start.strftime("%Y-%m-%d"),
        "extraction_date_end": end.strftime("%Y-%m-%d"),
    }
    start_text, end_text = request.values()
    logging.info(f"Fetching samples {start_text} to {end_text}...")
    response = session.post(DATA_URL, json=request)
    response.raise_for_status()
    data = response.json()
    body = data.get("body") if isinstance(data, dict) else None
    return body if isinstance(body, list) else []


def _sort_key(record):
    date = parse_date(record.get("extraction_date"))
    return date if date is not None else pandas.Timestamp.min


def latest_date(records):
    """Returns the latest parseable extraction_date (Timestamp), or None."""

    dates = [parse_date(r.get("extraction_date")) for r in records]
    return max((d for d in dates if d is not None), default=None)


def filter_duplicates(existing, incoming):
    """Returns incoming records whose sample number and date are new."""

    def key(r):
        return (r.get("sample_number"), r.get("extraction_date"))

    seen = set(key(r) for r in existing)
    return [r for r in incoming if key(r) not in seen]


def read_existing(path):
    """Returns the records stored at path, or [] if missing or unreadable."""

    try:
        with pathlib.Path(path).open(encoding="utf-8") as file:
            data = json.load(file)
    except FileNotFoundError:
        return []
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Ignoring non-array {path}")
        return []
    return [r for r in data if isinstance(r, dict)]


def update_data_file(session, path, today=None):
    """Fetches samples newer than those stored at path and appends them.

    Returns the number of records added.
    """

    today = (today or pandas.Timestamp.now()).normalize()
    existing = read_existing(path)
    latest = latest_date(existing)
    start = FIRST_DATE
    if latest is not None:
        start = latest + pandas.Timedelta(days=1)
    if start > today:
        logging.info("No new dates to fetch.")
        return 0

    unique = filter_duplicates(existing, get_samples(session, start, today))
    if not unique:
        logging.info("No new unique samples found.")
        return 0

    combined = sorted(existing + unique, key=_sort_key)
    with fetch_policy.temp_to_rename(path, mode="w") as file:
        json.dump(combined, file, indent=2, ensure_ascii=False)

    logging.info(f"Added {len(unique)} new samples. Total: {len(combined)}")
    return len(unique)


def credits():
    return {
        "https://hygiene-monitor.de/": "Hygiene-Monitor wastewater open data",
    }


if __name__ == "__main__":
    import argparse

    from wastewater import logging_policy  # noqa
    from wastewater.load_data import DEFAULT_DATA_FILE

    parser = argparse.ArgumentParser(
        parents=[fetch_policy.argument_parser, logging_policy.argument_parser]
    )
    parser.add_argument(
        "--data_file", type=pathlib.Path, default=DEFAULT_DATA_FILE
    )
    args = parser.parse_args()
    logging_policy.apply_args(args)
    session = fetch_policy.new_session(args)
    update_data_file(session, args.data_file)
