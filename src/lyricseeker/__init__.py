"""Word-level lyric search: top-N songs per word with lyric context."""

from lyricseeker.preprocessing import Song, load_songs, normalize_word
from lyricseeker.index import SongUsage, WordRanking, extract_context, index_song_words
from lyricseeker.search import QueryResolver, SongMatch

__version__ = "0.1.0"
