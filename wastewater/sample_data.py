"""Data structures for raw hygiene-monitor wastewater samples."""

import dataclasses
import math
import re
from typing import List
from typing import Optional
from typing import Union
from warnings import warn

import pandas

DATE_FORMAT = "%d.%m.%Y"

# Longest leading decimal number, as JavaScript parseFloat reads it.
_NUMBER_PREFIX = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclasses.dataclass(frozen=True)
class TestParameter:
    """One measured quantity of a test (e.g. copy_number_1)."""

    __test__ = False  # Not a pytest test class.

    name: Optional[str] = None
    result: Union[str, float, None] = None


@dataclasses.dataclass(frozen=True)
class TestResult:
    """One assay run on a sample (e.g. dPCR_1 SARS-CoV-2 N1)."""

    __test__ = False

    name: Optional[str] = None
    parameters: Optional[List[TestParameter]] = None


@dataclasses.dataclass(frozen=True)
class RawSample:
    station: str
    extraction_date: Optional[str]
    results: Optional[List[TestResult]] = None
    sample_number: Optional[str] = None

    def parsed_date(self):
        """Returns the extraction date as a Timestamp, or None if malformed."""

        return parse_date(self.extraction_date)

    @staticmethod
    def from_json(obj):
        """Returns a RawSample from one decoded API object (a dict).

        Fields of the wrong type come back as None rather than raising;
        the aggregation steps skip whatever is missing.
        """

        station = obj.get("measuring_point", obj.get("station"))
        return RawSample(
            station=station if isinstance(station, str) else "",
            extraction_date=_str_or_none(obj.get("extraction_date")),
            results=_list_or_none(obj.get("results"), _result_from_json),
            sample_number=_str_or_none(obj.get("sample_number")),
        )


def _str_or_none(v):
    if isinstance(v, str):
        return v
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return None


def _list_or_none(items, convert):
    if not isinstance(items, list):
        return None
    return [convert(i) for i in items if isinstance(i, dict)]


def _result_from_json(obj):
    name = obj.get("name")
    return TestResult(
        name=name if isinstance(name, str) else None,
        parameters=_list_or_none(obj.get("parameter"), _parameter_from_json),
    )


def _parameter_from_json(obj):
    name, result = obj.get("name"), obj.get("result")
    if isinstance(result, bool) or not isinstance(result, (str, int, float)):
        result = None
    return TestParameter(
        name=name if isinstance(name, str) else None, result=result
    )


def parse_samples(objs):
    """Returns a list of RawSample from a decoded JSON array."""

    samples = []
    for i, obj in enumerate(objs):
        if isinstance(obj, RawSample):
            samples.append(obj)
        elif not isinstance(obj, dict):
            warn(f"Skipping non-object sample[{i}]: {obj!r:.40}")
        else:
            sample = RawSample.from_json(obj)
            if sample.station:
                samples.append(sample)
            else:
                warn(f"Skipping sample[{i}] without measuring_point")
    return samples


def parse_date(text):
    """Parses a dd.mm.yyyy date string; returns None if malformed."""

    if not isinstance(text, str):
        return None
    try:
        date = pandas.to_datetime(text.strip(), format=DATE_FORMAT)
    except (ValueError, OverflowError):
        return None
    return None if pandas.isna(date) else date  # "" parses as NaT


def to_number(value):
    """Returns a finite float from a number or a decimal-comma string.

    Strings are read up to the end of their leading number once the first
    comma becomes a decimal point, so "12,5 copies" is 12.5 and "1.234,5"
    is 1.234. Anything else, including NaN and infinities, is None.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:  # Huge int.
            return None
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value.replace(",", ".", 1))
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None
