"""Functions that draw wastewater time series charts."""

import logging
import textwrap

import matplotlib
import matplotlib.dates
import matplotlib.pyplot
import matplotlib.ticker
import numpy
import pandas

from wastewater import formats
from wastewater.process_data import points_frame

matplotlib.use("Agg")
matplotlib.rcParams.update({"figure.max_open_warning": 0})

LINE_COLOR = "tab:blue"
GAP = pandas.Timedelta(days=15)


def date_extent(samples, today=None):
    """Returns the (start, end) X range covering all valid sample dates.

    Dates after today are ignored; the end is padded by one month, or
    extended to today if that is later.
    """

    today = today or pandas.Timestamp.now().normalize()
    dates = [d for d in (s.parsed_date() for s in samples) if d is not None]
    dates = [d for d in dates if d <= today]
    if not dates:
        return (today - pandas.DateOffset(months=1), today)

    end = max(dates) + pandas.DateOffset(months=1)
    return (min(dates), max(end, today))


def _setup_xaxis(axes, extent, title=None, wrapchars=25, titlesize=35):
    axes.set_xlim(*extent)
    axes.grid(color="black", alpha=0.1)

    month_locator = matplotlib.dates.MonthLocator(bymonth=range(1, 13, 2))
    month_formatter = matplotlib.dates.ConciseDateFormatter(month_locator)
    month_formatter.zero_formats[1] = "'%y"  # Abbreviate years.
    axes.xaxis.set_major_locator(month_locator)
    axes.xaxis.set_minor_locator(matplotlib.dates.MonthLocator())
    axes.xaxis.set_major_formatter(month_formatter)

    if title:
        text = "\n".join(textwrap.wrap(title, width=wrapchars))
        axes.text(
            0.5,
            0.5,
            text,
            transform=axes.transAxes,
            fontsize=titlesize,
            fontweight="bold",
            alpha=0.2,
            ha="center",
            va="center",
        )


def _setup_yaxis(axes, ylim):
    axes.set_ylim(0, ylim or 1)
    axes.set_ylabel("SARS-CoV-2 copies / L")
    axes.yaxis.set_label_position("right")
    axes.yaxis.tick_right()
    axes.yaxis.set_major_formatter(
        matplotlib.ticker.FuncFormatter(
            lambda v, pos: formats.format_number_thousand(v)
        )
    )


def _with_gaps(frame):
    """Inserts empty rows so lines break across long sampling gaps."""

    deltas = frame.index.to_series().diff()
    gaps = deltas[deltas > GAP]
    breaks = pandas.DataFrame(
        numpy.nan, index=gaps.index - gaps.values / 2, columns=frame.columns
    )
    return pandas.concat([frame, breaks]).sort_index()


def _plot_points(axes, frame, label):
    frame = _with_gaps(frame)
    if frame["max"].gt(frame["min"]).any():
        axes.fill_between(
            frame.index,
            frame["min"],
            frame["max"],
            color=LINE_COLOR,
            alpha=0.2,
            lw=0,
        )

    axes.plot(frame.index, frame.value, color=LINE_COLOR, lw=2, label=label)
    last = frame.value.dropna().iloc[-1:]
    axes.scatter(last.index, last.values, color=LINE_COLOR, s=36)


def write_chart(points, filename, title, ylim, extent):
    """Writes a PNG chart of AggregatedPoints with a shared Y limit."""

    fig = matplotlib.pyplot.figure(figsize=(13, 4), dpi=100)
    axes = fig.add_subplot()
    _setup_xaxis(axes, extent, title=title)
    _setup_yaxis(axes, ylim)

    if points:
        _plot_points(axes, points_frame(points), label=title)
        axes.legend(loc="upper left")
    else:
        logging.warning(f"No data to plot: {title}")

    logging.debug(f"Writing: {filename}")
    fig.tight_layout(pad=0.5)
    fig.savefig(filename)
    matplotlib.pyplot.close(fig)  # Reclaim memory.
