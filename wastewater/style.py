"""Module to set up website collateral (style sheet, head tags)."""

import pathlib

from dominate import tags

from wastewater import urls

STYLE_FILES = ("style.css",)


def write_style_files(site_dir):
    """Copies style files from the source directory into site_dir."""

    source_dir = pathlib.Path(__file__).parent
    for name in STYLE_FILES:
        with open(source_dir / name, "rb") as read_file:
            with open(urls.file(site_dir, name), "wb") as write_file:
                write_file.write(read_file.read())


def add_head_style(this_urlpath=""):
    """Adds <meta> and <link> tags for style files, assuming <head> context."""

    tags.meta(charset="utf-8")
    tags.meta(name="viewport", content="width=device-width, initial-scale=1.0")
    for name in STYLE_FILES:
        tags.link(
            rel="stylesheet",
            type="text/css",
            href=urls.link(this_urlpath, name),
        )
