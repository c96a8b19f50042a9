import pytest

from lyricseeker.preprocessing import Song


@pytest.fixture
def songs():
    return [
        Song("Band A", "Fire Song", tuple("fire fire fire fire fire burn".split())),
        Song("Band B", "Small Fire", tuple("a small Fire, fire fire".split())),
        Song("Band C", "Love", tuple("love is love love".split())),
    ]
