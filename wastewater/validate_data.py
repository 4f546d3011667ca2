"""Checks that the stored sample file has usable chart data.

Only chart-relevant SARS-CoV-2 results are checked; NGS, RSV and
influenza tests are ignored.
"""

from warnings import warn

from wastewater.process_data import EXCLUDED_MARKER
from wastewater.process_data import PATHOGEN_MARKER
from wastewater.process_data import VALUE_PARAMETER_PREFIX
from wastewater.sample_data import to_number


def _relevant_results(sample):
    results = sample.get("results")
    return [
        r
        for r in (results if isinstance(results, list) else [])
        if isinstance(r, dict)
        and isinstance(r.get("name"), str)
        and PATHOGEN_MARKER in r["name"]
        and EXCLUDED_MARKER not in r["name"]
        and isinstance(r.get("parameter"), list)
    ]


def _check_sample(sample, index):
    if not isinstance(sample, dict):
        raise ValueError(f"sample[{index}]: not an object")

    relevant = _relevant_results(sample)
    if not relevant:
        warn(f"sample[{index}]: no {PATHOGEN_MARKER} results found")
        return

    for r_index, result in enumerate(relevant):
        copy_values = [
            p
            for p in result["parameter"]
            if isinstance(p, dict)
            and isinstance(p.get("name"), str)
            and p["name"].startswith(VALUE_PARAMETER_PREFIX)
            and isinstance(p.get("result"), (str, int, float))
        ]
        if not copy_values:
            raise ValueError(
                f"sample[{index}].results[{r_index}]: "
                f"no valid {VALUE_PARAMETER_PREFIX}* results"
            )

        for p_index, p in enumerate(copy_values):
            if to_number(p["result"]) is None:
                raise ValueError(
                    f"sample[{index}].results[{r_index}]"
                    f".parameter[{p_index}]: invalid number {p['result']!r}"
                )


def check_chart_data(records):
    """Raises ValueError if records (decoded JSON) can't feed the chart.

    Returns the number of records checked.
    """

    if not isinstance(records, list) or not records:
        raise ValueError("Top-level data must be a non-empty array")

    for index, sample in enumerate(records):
        _check_sample(sample, index)

    return len(records)


def main():
    import argparse
    import json
    import logging
    import pathlib
    import sys

    from wastewater import logging_policy  # noqa
    from wastewater.load_data import DEFAULT_DATA_FILE

    parser = argparse.ArgumentParser(parents=[logging_policy.argument_parser])
    parser.add_argument(
        "--data_file", type=pathlib.Path, default=DEFAULT_DATA_FILE
    )
    args = parser.parse_args()
    logging_policy.apply_args(args)

    try:
        with args.data_file.open(encoding="utf-8") as file:
            count = check_chart_data(json.load(file))
    except (OSError, ValueError) as e:
        logging.error(f"Chart validation failed: {e}")
        sys.exit(1)

    print(f"Chart validation passed: {count} records")


if __name__ == "__main__":
    main()
