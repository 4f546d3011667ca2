"""Main program to generate the wastewater dashboard static site."""

import argparse
import logging
import pathlib

import dominate
from dominate import tags
from dominate import util

from wastewater import fetch_hygiene_monitor
from wastewater import fetch_policy
from wastewater import formats
from wastewater import load_data
from wastewater import logging_policy  # noqa
from wastewater import make_chart
from wastewater import population
from wastewater import process_data
from wastewater import style
from wastewater import urls

COMPOSITE_NAME = "Berlin (population weighted)"


def build_series(samples, weights):
    """Returns {name: points} for every station, plus the weighted composite.

    The composite is added only if at least one weighted station has data.
    """

    stations = process_data.list_stations(samples)
    series = {s: process_data.aggregate_station(samples, s) for s in stations}

    weighted = {s: series.get(s, []) for s in weights.stations}
    for s in weights.stations:
        if s not in series:
            logging.warning(f"No samples for weighted station: {s}")

    composite = process_data.weighted_composite(weighted, weights)
    if composite:
        series[COMPOSITE_NAME] = composite
    return series


def make_index_html(series, ylim, site_dir):
    """Writes the index page listing every series chart."""

    doc = dominate.document(title="Berlin wastewater SARS-CoV-2")
    with doc.head:
        style.add_head_style(urls.INDEX_PAGE)

    with doc.body:
        tags.h1("SARS-CoV-2 in Berlin wastewater")
        tags.p(
            "Mean dPCR copy numbers per sample date; "
            f"shared scale up to {formats.format_number_thousand(ylim)}."
        )
        dates = [p.date for points in series.values() for p in points]
        if dates:
            tags.p(f"Data through {formats.format_date_us(max(dates))}.")

        for name, points in series.items():
            with tags.div(cls="series"):
                tags.h2(name)
                if points:
                    last = max(points, key=lambda p: p.date)
                    tags.div(
                        f"{formats.format_number_thousand(last.value)} "
                        f"on {formats.format_date(last.date)} "
                        f"({len(points)} dates)",
                        cls="latest",
                    )
                href = urls.link(urls.INDEX_PAGE, urls.chart_image(name))
                tags.img(cls="graphic", src=href, alt=name)

        with tags.p("Sources: ", cls="credits"):
            for i, (url, text) in enumerate(
                fetch_hygiene_monitor.credits().items()
            ):
                if i > 0:
                    util.text(", ")
                tags.a(text, href=url)

    index_path = urls.file(site_dir, urls.INDEX_PAGE)
    with open(index_path, "w", encoding="utf-8") as doc_file:
        doc_file.write(doc.render())


def make_site(samples, weights, site_dir, today=None):
    """Writes charts, style files and index page for samples into site_dir."""

    series = build_series(samples, weights)
    ylim = process_data.global_upper_bound(series.values())
    extent = make_chart.date_extent(samples, today=today)

    logging.info(f"Writing {len(series)} charts in {site_dir}...")
    style.write_style_files(site_dir)
    for name, points in series.items():
        filename = urls.file(site_dir, urls.chart_image(name))
        make_chart.write_chart(points, filename, name, ylim, extent)

    make_index_html(series, ylim, site_dir)
    return series


def main():
    parser = argparse.ArgumentParser(
        parents=[fetch_policy.argument_parser, logging_policy.argument_parser]
    )
    parser.add_argument("--fetch", action="store_true")
    parser.add_argument(
        "--data_file", type=pathlib.Path, default=load_data.DEFAULT_DATA_FILE
    )
    parser.add_argument("--population_file", type=pathlib.Path)
    parser.add_argument(
        "--site_dir", type=pathlib.Path, default=pathlib.Path("site_out")
    )
    args = parser.parse_args()
    logging_policy.apply_args(args)

    if args.fetch:
        session = fetch_policy.new_session(args)
        fetch_hygiene_monitor.update_data_file(session, args.data_file)

    weights = population.load_population_weights(args.population_file)
    samples = load_data.load_samples(args.data_file)
    make_site(samples, weights, args.site_dir)


if __name__ == "__main__":
    main()
