"""Functions to aggregate raw wastewater samples into per-date series.

Only dPCR SARS-CoV-2 results are used (not the pan-sarbecovirus E-gene
assay). Replicate copy_number_* values are averaged per test, then test
means are averaged per sample date.
"""

import dataclasses
import logging
import math
from warnings import warn

import numpy
import pandas

from wastewater.sample_data import RawSample
from wastewater.sample_data import parse_samples
from wastewater.sample_data import to_number

PATHOGEN_MARKER = "SARS-CoV-2"
EXCLUDED_MARKER = "E-gene"
VALUE_PARAMETER_PREFIX = "copy_number_"
UPPER_BOUND_PADDING = 1.1

logger = logging.getLogger("wastewater.process_data")


@dataclasses.dataclass(frozen=True)
class AggregatedPoint:
    date: pandas.Timestamp
    value: float
    min: float
    max: float

    @staticmethod
    def single(date, value):
        """Returns a point with no spread (as for a composite value)."""

        return AggregatedPoint(date=date, value=value, min=value, max=value)


def points_frame(points):
    """Returns a DataFrame of points (value/min/max) indexed by date."""

    frame = pandas.DataFrame(
        {
            "value": [p.value for p in points],
            "min": [p.min for p in points],
            "max": [p.max for p in points],
        },
        index=pandas.DatetimeIndex([p.date for p in points], name="date"),
    )
    return frame.sort_index()


def _samples_or_none(raw):
    if not isinstance(raw, (list, tuple)):
        return None
    if all(isinstance(s, RawSample) for s in raw):
        return raw
    return parse_samples(raw)


def list_stations(raw):
    """Returns the distinct station names in raw, in first-seen order."""

    samples = _samples_or_none(raw)
    if samples is None:
        warn(f"Expected a list of samples, got {type(raw).__name__}")
        return []
    return list(dict.fromkeys(s.station for s in samples))


def _is_relevant(result):
    return (
        result.name is not None
        and PATHOGEN_MARKER in result.name
        and EXCLUDED_MARKER not in result.name
        and result.parameters is not None
    )


def _test_values(result):
    values = []
    for p in result.parameters:
        if p.name is None or not p.name.startswith(VALUE_PARAMETER_PREFIX):
            continue
        v = to_number(p.result)
        if v is not None:
            values.append(v)
    return values


def _finite_mean(values):
    with numpy.errstate(over="ignore"):
        mean = float(numpy.mean(values))
    return mean if math.isfinite(mean) else None


def _test_means(sample):
    means = []
    for result in sample.results or []:
        if _is_relevant(result):
            values = _test_values(result)
            if not values:
                continue
            mean = _finite_mean(values)
            if mean is None:
                warn(f"Overflowing mean: {sample.station} {result.name}")
            else:
                means.append(mean)
    return means


def aggregate_station(raw, station):
    """Returns AggregatedPoints for one station, in sample order.

    Each sample yields one point (mean, min and max over its SARS-CoV-2
    test-level means), or nothing if no test produced a usable value.
    """

    samples = _samples_or_none(raw)
    if samples is None:
        warn(f"Expected a list of samples, got {type(raw).__name__}")
        return []

    points = []
    for sample in samples:
        date = sample.parsed_date()
        if date is None:
            warn(
                f"Skipping {sample.station} sample with invalid date: "
                f"{sample.extraction_date!r}"
            )
            continue
        if sample.station != station:
            continue

        means = _test_means(sample)
        if not means:
            logger.debug(f"No SARS-CoV-2 values: {station} {date.date()}")
            continue
        value = _finite_mean(means)
        if value is None:
            warn(f"Overflowing mean: {station} {date.date()}")
            continue

        points.append(
            AggregatedPoint(
                date=date,
                value=value,
                min=min(means),
                max=max(means),
            )
        )

    return points


def global_upper_bound(all_series):
    """Returns the largest value of all series plus 10%, rounded (0 if none).

    Used as the shared Y axis limit so stations are visually comparable.
    """

    values = [
        p.value
        for series in all_series
        for p in series
        if math.isfinite(p.value)
    ]
    if not values:
        return 0
    top = max(values)
    padded = top * UPPER_BOUND_PADDING
    # Round half up, unlike round().
    return math.floor((padded if math.isfinite(padded) else top) + 0.5)


def weighted_average(values_by_station, weights):
    """Returns the population-weighted mean of non-None values, or None."""

    present = {s: v for s, v in values_by_station.items() if v is not None}
    weight_sum = sum(weights.weight(s) for s in present)
    if weight_sum == 0:
        return None

    # Normalized weights keep value * weight inside the float range.
    total = sum(
        v * (weights.weight(s) / weight_sum) for s, v in present.items()
    )
    return total if math.isfinite(total) else None


def weighted_composite(series_by_station, weights):
    """Returns a citywide series of population-weighted station values.

    series_by_station maps each weighted station name to its AggregatedPoints.
    A date reported by only some stations is averaged over those stations'
    weights alone.
    """

    value_by_date = {}
    for station, series in series_by_station.items():
        weights.weight(station)  # Fail early for unweighted stations.
        for p in series:
            dates = value_by_date.setdefault(p.date, {})
            dates.setdefault(station, p.value)  # First point wins.

    out = []
    for date in sorted(value_by_date):
        values = {s: value_by_date[date].get(s) for s in series_by_station}
        v = weighted_average(values, weights)
        if v is not None:
            out.append(AggregatedPoint.single(date, v))

    return out
