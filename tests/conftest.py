"""
Re-useable fixtures and sample builders for tests
"""

import pytest

from wastewater.population import PopulationWeights


def make_result(name, *values, prefix="copy_number_"):
    """Returns a decoded API test result with one parameter per value."""

    return {
        "name": name,
        "parameter": [
            {"name": f"{prefix}{i + 1}", "result": v}
            for i, v in enumerate(values)
        ],
    }


def make_sample(station, date, *results, sample_number=None):
    """Returns a decoded API sample object."""

    sample = {
        "measuring_point": station,
        "extraction_date": date,
        "results": list(results),
    }
    if sample_number is not None:
        sample["sample_number"] = sample_number
    return sample


@pytest.fixture
def weights():
    return PopulationWeights(
        by_station={
            "Ruhleben": 1000,
            "Schönerlinde": 500,
            "Waßmannsdorf": 250,
        }
    )


@pytest.fixture
def raw_dataset():
    return [
        make_sample(
            "Ruhleben",
            "01.02.2022",
            make_result("dPCR_1 SARS-CoV-2 N1", "100,0", "200,0"),
            make_result("dPCR_1 SARS-CoV-2 N2", "200,0", "300,0"),
            sample_number="R-1",
        ),
        make_sample(
            "Schönerlinde",
            "01.02.2022",
            make_result("dPCR_1 SARS-CoV-2 N1", 400),
            sample_number="S-1",
        ),
        make_sample(
            "Ruhleben",
            "08.02.2022",
            make_result("dPCR_1 SARS-CoV-2 N1", "50,5"),
            sample_number="R-2",
        ),
        make_sample(
            "Waßmannsdorf",
            "08.02.2022",
            make_result("dPCR_1 SARS-CoV-2 N1", "1000"),
            sample_number="W-1",
        ),
        make_sample(
            "BER",
            "08.02.2022",
            make_result("dPCR_1 SARS-CoV-2 N1", "9999"),
            sample_number="B-1",
        ),
    ]
