"""Shared definitions of file placement within the static site."""

import os
import re

INDEX_PAGE = "index.html"


def _slug(name):
    return re.sub(r"[\W]+", "_", name).strip("_").lower()


def chart_image(series_name):
    return f"charts/{_slug(series_name)}.png"


def link(from_urlpath, to_urlpath):
    """Returns the relative URL to get from from_urlpath to to_urlpath."""

    if to_urlpath[:1] == "/" or "/" not in from_urlpath:
        return to_urlpath
    if from_urlpath[:1] == "/":
        return "/" + to_urlpath
    if "/" in to_urlpath:
        f0, f1 = from_urlpath.split("/", 1)
        t0, t1 = to_urlpath.split("/", 1)
        if f0 == t0:
            return link(f1, t1)
    return ("../" * from_urlpath.count("/")) + to_urlpath


def file(site_dir, urlpath):
    """Returns the file path within site_dir corresponding to urlpath,
    creating parent directories as needed."""

    filepath = site_dir / urlpath.strip("/")
    os.makedirs(filepath.parent, exist_ok=True)
    return filepath
