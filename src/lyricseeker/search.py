# -*- coding: utf-8 -*-
"""
Interactive word search over a lyrics corpus.

Loads the corpus, ranks the top songs for every word, then answers
one query word per line until the sentinel (EXIT by default).

Usage:
    lyricseeker
    lyricseeker --data songdata.csv --top-n 5 --context 3
"""
import sys
import time
import logging
import argparse
from typing import NamedTuple

from lyricseeker.config import load_config, validate
from lyricseeker.index import WordRanking, extract_context
from lyricseeker.preprocessing import CorpusFormatError, load_songs

log = logging.getLogger(__name__)


class SongMatch(NamedTuple):
    artist: str
    title: str
    contexts: list

    @property
    def occurrences(self) -> int:
        return len(self.contexts)


class QueryResolver():
    """Turns a query word into ranked songs with lyric context."""

    def __init__(self, songs, ranking: WordRanking, context_radius: int = 5):
        self.songs = songs
        self.ranking = ranking
        self.context_radius = context_radius

    @classmethod
    def build(cls, songs, top_n: int = 10, context_radius: int = 5, started=None):
        """started: perf_counter() reading to time from, e.g. before the corpus load."""
        start = time.perf_counter() if started is None else started
        ranking = WordRanking(top_n).ingest_songs(songs)
        elapsed = time.perf_counter() - start
        log.info("[index] songs=%d, words=%d, top_n=%d", len(songs), len(ranking), top_n)
        log.info("Data structure built. Time: %.3f seconds", elapsed)
        return cls(songs, ranking, context_radius)

    def resolve(self, word: str):
        """List of SongMatch in rank order, or None if the word is not found."""
        usages = self.ranking.lookup(word)
        if usages is None:
            return None
        matches = []
        for usage in usages:
            song = self.songs[usage.song_index]
            contexts = extract_context(song.lyrics, usage.positions, self.context_radius)
            matches.append(SongMatch(song.artist, song.title, contexts))
        return matches


# ---------- Pretty printing ----------
def format_matches(matches) -> str:
    lines = []
    for i, match in enumerate(matches, start=1):
        lines.append(f"Result #{i} has {match.occurrences} occurrences:\n\n")
        for context in match.contexts:
            lines.append(f"Title: {match.title}")
            lines.append(f"Artist: {match.artist}")
            lines.append(f"Context: {context}\n")
    return "\n".join(lines)


def run_search_loop(resolver: QueryResolver, sentinel: str = "EXIT",
                    input_fn=None, output_fn=print) -> int:
    """Answer queries until the sentinel or EOF. Returns how many were served."""
    input_fn = input_fn or input
    served = 0
    while True:
        try:
            query = input_fn(f"Enter a word to search, or {sentinel} to exit: ")
        except EOFError:
            break
        query = query.rstrip("\n")
        if query == sentinel:
            break
        served += 1
        matches = resolver.resolve(query)
        if matches is None:
            output_fn("Word not found.")
        else:
            output_fn(format_matches(matches))
    return served


# ---------- Main ----------
def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Search song lyrics by word")
    parser.add_argument("--config", default=None, help="YAML config file (default: config.yaml)")
    parser.add_argument("--data", default=None, help="Lyrics corpus CSV")
    parser.add_argument("--top-n", type=int, default=None, help="Songs kept per word")
    parser.add_argument("--context", type=int, default=None, help="Context words on each side")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        if args.data is not None:
            config["data"]["corpus"] = args.data
        if args.top_n is not None:
            config["search"]["top_n"] = args.top_n
        if args.context is not None:
            config["search"]["context_radius"] = args.context
        validate(config)
    except (ValueError, OSError) as e:
        print(f"[ERROR] bad configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config["logging"]["level"],
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    data_path = config["data"]["corpus"]
    search = config["search"]
    start = time.perf_counter()
    try:
        songs = load_songs(data_path)
    except FileNotFoundError:
        print(f"\n[ERROR] The file '{data_path}' was not found.", file=sys.stderr)
        print("Please make sure your CSV file is in the right directory.", file=sys.stderr)
        return 1
    except CorpusFormatError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    resolver = QueryResolver.build(songs, int(search["top_n"]), int(search["context_radius"]),
                                  started=start)
    run_search_loop(resolver, sentinel=str(search["sentinel"]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
