"""
Campus gazetteer: the static name -> (lat, lng) table of points of interest.

The table is read from a CSV with `label,lat,lon` columns. Lookups are
accent and case insensitive: queries and labels both go through
normalize_name() before they are compared.
"""

import os
import logging
import math
import unicodedata
from contextlib import contextmanager
from types import MappingProxyType
from typing import List, NamedTuple, Optional, Union

import fcntl
import pandas as pd

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Config / paths
# --------------------------------------------------------------------
BASE_DIR = os.path.dirname(__file__)
PLACES_CSV = os.environ.get("CAMPUSROUTE_PLACES_CSV") or os.path.join(BASE_DIR, "places.csv")


class Coordinate(NamedTuple):
    lat: float
    lng: float


class NotFound(NamedTuple):
    """Resolution miss; carries the labels that contain the query."""

    suggestions: List[str]


# --------------------------------------------------------------------
# Small utilities
# --------------------------------------------------------------------
@contextmanager
def locked_file(path: str, mode: str = "r"):
    """Open a file holding a shared advisory lock for the duration of the context."""
    f = open(path, mode, newline="", encoding="utf-8")
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        yield f
    finally:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        f.close()


def normalize_name(text: str) -> str:
    """Strip diacritics (NFD + drop combining marks) and lowercase."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def clean_places_df(df: pd.DataFrame) -> pd.DataFrame:
    """Trim labels, coerce lat/lon to numeric, drop invalid and duplicate rows."""
    df["label"] = df["label"].str.strip()
    df["lat"] = pd.to_numeric(df.get("lat"), errors="coerce")
    df["lon"] = pd.to_numeric(df.get("lon"), errors="coerce")

    infinite = df[["lat", "lon"]].isin([math.inf, -math.inf]).any(axis=1)
    bad = df[["label", "lat", "lon"]].isna().any(axis=1) | infinite | (df["label"] == "")
    for label in df.loc[bad, "label"]:
        logger.warning("Skipping place with bad data: %r", label)
    df = df[~bad]

    dupes = df["label"].duplicated(keep="first")
    for label in df.loc[dupes, "label"]:
        logger.warning("Duplicate place label %r, keeping the first row", label)
    return df[~dupes]


# --------------------------------------------------------------------
# Gazetteer
# --------------------------------------------------------------------
class Gazetteer:
    """Read-only name -> Coordinate table, safe to share between requests."""

    def __init__(self, entries):
        if hasattr(entries, "items"):
            entries = entries.items()
        places = {}
        for name, (lat, lng) in entries:
            if name in places:
                continue
            lat, lng = float(lat), float(lng)
            if not (math.isfinite(lat) and math.isfinite(lng)):
                raise ValueError(f"Non-finite coordinate for {name!r}")
            places[name] = Coordinate(lat, lng)
        self._places = MappingProxyType(places)

        # normalized label -> label; first label wins if two normalize alike
        index = {}
        for name in places:
            index.setdefault(normalize_name(name), name)
        self._index = MappingProxyType(index)

    def __len__(self):
        return len(self._places)

    def __iter__(self):
        return iter(self._places)

    def __contains__(self, name):
        return name in self._places

    def __getitem__(self, name) -> Coordinate:
        return self._places[name]

    @property
    def names(self) -> List[str]:
        return list(self._places)

    def to_dict(self):
        return {name: list(coord) for name, coord in self._places.items()}

    def suggest(self, query: str) -> List[str]:
        """Labels whose normalized form contains the normalized query, in gazetteer order."""
        needle = normalize_name(query)
        return [name for name in self._places if needle in normalize_name(name)]

    def resolve(self, query: str) -> Union[Coordinate, NotFound]:
        """Exact (normalized) match, or NotFound carrying substring suggestions."""
        name = self._index.get(normalize_name(query))
        if name is not None:
            return self._places[name]
        return NotFound(self.suggest(query))


_PLACES_CACHE = {}


def load_places(path: Optional[str] = None, force: bool = False) -> Gazetteer:
    """Build (or reuse) the gazetteer for `path`; a changed file yields a new Gazetteer."""
    path = path or PLACES_CSV
    mtime = os.path.getmtime(path)

    cached = _PLACES_CACHE.get(path)
    if not force and cached is not None and cached[0] == mtime:
        return cached[1]

    with locked_file(path, "r") as f:
        df = clean_places_df(pd.read_csv(f, dtype={"label": str}, float_precision="round_trip"))

    gazetteer = Gazetteer((row.label, (row.lat, row.lon)) for row in df.itertuples(index=False))
    logger.info("Loaded %d places from %s", len(gazetteer), path)
    _PLACES_CACHE[path] = (mtime, gazetteer)
    return gazetteer
