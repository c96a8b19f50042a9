import logging
from dataclasses import dataclass

import numpy as np

from lyricseeker.preprocessing import normalize_word

log = logging.getLogger(__name__)


def index_song_words(lyrics) -> dict:
    """Map each normalized word of one song to the positions where it occurs."""
    usages = {}
    for position, token in enumerate(lyrics):
        word = normalize_word(token)
        if not word:
            continue
        usages.setdefault(word, []).append(position)
    return usages


@dataclass(frozen=True)
class SongUsage:
    song_index: int
    positions: tuple

    @property
    def count(self) -> int:
        return len(self.positions)


class WordRanking():
    """
    For every word, the top_n songs with the most occurrences of it,
    kept in descending count order. Among equal counts the song
    ingested first ranks first.
    """

    def __init__(self, top_n: int = 10):
        if top_n < 1:
            raise ValueError(f"top_n must be >= 1, got {top_n}")
        self.top_n = top_n
        self._usages = {}   # word -> list[SongUsage], len <= top_n

    def __len__(self):
        return len(self._usages)

    def __contains__(self, word):
        return normalize_word(word) in self._usages

    def words(self):
        return list(self._usages)

    def ingest(self, song_index: int, usage_map: dict):
        """Fold one song's word usages into the ranking. Call once per song."""
        for word, positions in usage_map.items():
            entry = SongUsage(song_index, tuple(positions))
            ranked = self._usages.get(word)

            if ranked is None:
                self._usages[word] = [entry]
            elif len(ranked) < self.top_n:
                ranked.append(entry)
                _bubble_up(ranked)
            elif ranked[-1].count < entry.count:
                ranked[-1] = entry
                _bubble_up(ranked)

    def ingest_songs(self, songs):
        for song_index, song in enumerate(songs):
            self.ingest(song_index, index_song_words(song.lyrics))
        return self

    def lookup(self, word: str):
        """Ranked usages for word as a tuple, or None if no song uses it."""
        ranked = self._usages.get(normalize_word(word))
        if ranked is None:
            return None
        return tuple(ranked)


def _bubble_up(usages):
    # Only the last entry can be out of place; stop at the first ordered pair.
    for i in range(len(usages) - 1, 0, -1):
        if usages[i].count > usages[i - 1].count:
            usages[i], usages[i - 1] = usages[i - 1], usages[i]
        else:
            break


def extract_context(lyrics, positions, radius: int) -> list:
    """
    One context string per position: up to `radius` words on each side,
    clamped to the start and end of the lyrics.
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    if len(positions) == 0:
        return []
    last = len(lyrics) - 1
    pos = np.asarray(positions, dtype=np.int64)
    starts = np.clip(pos - radius, 0, last)
    ends = np.clip(pos + radius, 0, last)
    return [" ".join(lyrics[s:e + 1]) for s, e in zip(starts.tolist(), ends.tolist())]
