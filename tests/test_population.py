"""
Tests of wastewater.population
"""

import json
import re

import pytest

from wastewater.population import PopulationWeights
from wastewater.population import load_population_weights


def test_default_file():
    weights = load_population_weights()

    assert sorted(weights.stations) == sorted(
        ["Ruhleben", "Schönerlinde", "Waßmannsdorf"]
    )
    assert all(weights.weight(s) > 0 for s in weights.stations)


def test_load_from_path(tmp_path):
    path = tmp_path / "pop.json"
    path.write_text(
        json.dumps({"A": 1, "B": 2.5, "C": 3}), encoding="utf-8"
    )

    weights = load_population_weights(path)

    assert weights.weight("B") == 2.5
    assert weights.stations == ["A", "B", "C"]


def test_load_non_object(tmp_path):
    path = tmp_path / "pop.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ValueError, match="not an object"):
        load_population_weights(path)


@pytest.mark.parametrize(
    "by_station, error_msg",
    (
        pytest.param({"A": 1, "B": 2}, "Need 3 weighted stations", id="two"),
        pytest.param(
            {"A": 1, "B": 2, "C": 3, "D": 4},
            "Need 3 weighted stations",
            id="four",
        ),
        pytest.param(
            {"A": 1, "B": 2, "C": 0}, "Bad population for C", id="zero"
        ),
        pytest.param(
            {"A": 1, "B": -2, "C": 3}, "Bad population for B", id="neg"
        ),
        pytest.param(
            {"A": "1", "B": 2, "C": 3}, "Bad population for A", id="string"
        ),
        pytest.param(
            {"A": 1, "B": float("inf"), "C": 3},
            "Bad population for B",
            id="inf",
        ),
    ),
)
def test_invalid_weights(by_station, error_msg):
    with pytest.raises(ValueError, match=re.escape(error_msg)):
        PopulationWeights(by_station=by_station)


def test_weights_read_only():
    source = {"A": 1, "B": 2, "C": 3}
    weights = PopulationWeights(by_station=source)
    source["A"] = 100

    assert weights.weight("A") == 1
    with pytest.raises(TypeError):
        weights.by_station["A"] = 5


def test_unknown_station():
    weights = PopulationWeights(by_station={"A": 1, "B": 2, "C": 3})

    with pytest.raises(ValueError, match="No population weight for 'D'"):
        weights.weight("D")
