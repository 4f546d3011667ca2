"""Module to load the stored hygiene-monitor sample file."""

import json
import logging
import pathlib

from wastewater.sample_data import parse_samples

DEFAULT_DATA_FILE = pathlib.Path("data") / "data.json"


def load_samples(path=DEFAULT_DATA_FILE):
    """Returns a list of RawSample from a JSON array file.

    Raises ValueError if the document is not a JSON array.
    """

    path = pathlib.Path(path)
    logging.info(f"Loading samples: {path}")
    with path.open(encoding="utf-8") as file:
        data = json.load(file)

    if not isinstance(data, list):
        raise ValueError(f"Sample data is not an array: {path}")

    return parse_samples(data)


if __name__ == "__main__":
    import argparse

    from wastewater import logging_policy  # noqa
    from wastewater import process_data

    parser = argparse.ArgumentParser(parents=[logging_policy.argument_parser])
    parser.add_argument(
        "--data_file", type=pathlib.Path, default=DEFAULT_DATA_FILE
    )
    args = parser.parse_args()
    logging_policy.apply_args(args)

    samples = load_samples(args.data_file)
    print(f"{len(samples)} samples")
    for station in process_data.list_stations(samples):
        points = process_data.aggregate_station(samples, station)
        last = f"last={points[-1].value:.1f}" if points else "no data"
        print(f"=== {station}: {len(points)} dates, {last} ===")
