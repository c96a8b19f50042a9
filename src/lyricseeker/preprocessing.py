import re
import csv
import sys
import logging
from typing import NamedTuple

import pandas as pd

try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2**31 - 1)

log = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class CorpusFormatError(ValueError):
    """Raised when the corpus CSV lacks the columns a song needs."""


class Song(NamedTuple):
    artist: str
    title: str
    lyrics: tuple


def normalize_word(token: str) -> str:
    """
    lower, then strip everything outside [a-z0-9].
    Used for both indexing and queries so keys always agree.
    """
    return _NON_ALNUM.sub("", str(token).lower())


def split_lyrics(text) -> tuple:
    if not isinstance(text, str):
        return ()
    return tuple(text.split())


def _pick_column(lower_cols: dict, *names):
    for name in names:
        if name in lower_cols:
            return lower_cols[name]
    return None


def load_songs(csv_path: str) -> list:
    """
    Read the lyric corpus into a list of Song records.
    The list position of each song is its index for the rest of the run.
    """
    try:
        df = pd.read_csv(
            csv_path,
            sep=',',
            quotechar='"',
            doublequote=True,
            dtype=str,
            keep_default_na=False,
            engine='python',
            encoding='utf-8',
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise CorpusFormatError(f"{csv_path}: {e}") from e

    # tolerant column autodetection
    lower_cols = {c.strip().lower(): c for c in df.columns}
    artist_col = _pick_column(lower_cols, "artist")
    if artist_col is None:
        raise CorpusFormatError(f"{csv_path}: no 'artist' column in {list(df.columns)}")
    title_col = _pick_column(lower_cols, "song", "title")
    lyrics_col = _pick_column(lower_cols, "text", "lyrics") or list(df.columns)[-1]

    # repeated header rows inside the data
    df = df[df[artist_col] != "artist"]

    titles = df[title_col] if title_col is not None else [""] * len(df)
    songs = [
        Song(artist=artist, title=title, lyrics=split_lyrics(text))
        for artist, title, text in zip(df[artist_col], titles, df[lyrics_col])
    ]
    log.info("[corpus] loaded rows=%d from %s", len(songs), csv_path)
    return songs
