"""Catchment population figures used to weight the citywide series."""

import dataclasses
import json
import math
import pathlib
import types
from typing import Mapping

DEFAULT_PATH = pathlib.Path(__file__).parent / "population.json"

WEIGHTED_STATION_COUNT = 3


@dataclasses.dataclass(frozen=True)
class PopulationWeights:
    """Read-only population per weighted treatment plant."""

    by_station: Mapping[str, float]

    def __post_init__(self):
        by_station = dict(self.by_station)
        if len(by_station) != WEIGHTED_STATION_COUNT:
            raise ValueError(
                f"Need {WEIGHTED_STATION_COUNT} weighted stations, "
                f"got {len(by_station)}: {sorted(by_station)}"
            )
        for station, pop in by_station.items():
            if isinstance(pop, bool) or not isinstance(pop, (int, float)):
                raise ValueError(f"Bad population for {station}: {pop!r}")
            if not (math.isfinite(pop) and pop > 0):
                raise ValueError(f"Bad population for {station}: {pop}")

        frozen = types.MappingProxyType(by_station)
        object.__setattr__(self, "by_station", frozen)

    @property
    def stations(self):
        return list(self.by_station)

    def weight(self, station):
        try:
            return self.by_station[station]
        except KeyError:
            raise ValueError(f"No population weight for {station!r}") from None


def load_population_weights(path=None):
    """Returns PopulationWeights from a JSON {station: population} file."""

    path = pathlib.Path(path or DEFAULT_PATH)
    with path.open(encoding="utf-8") as file:
        data = json.load(file)
    if not isinstance(data, dict):
        raise ValueError(f"Population file is not an object: {path}")
    return PopulationWeights(by_station=data)
