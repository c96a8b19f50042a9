import pytest

from lyricseeker.search import QueryResolver, SongMatch, format_matches, main, run_search_loop


@pytest.fixture
def resolver(songs):
    return QueryResolver.build(songs, top_n=10, context_radius=1)


def test_resolve_love_example(resolver):
    assert resolver.resolve("love") == [
        SongMatch("Band C", "Love", ["love is", "is love love", "love love"]),
    ]


def test_resolve_orders_by_occurrences(resolver):
    matches = resolver.resolve("Fire")
    assert [m.title for m in matches] == ["Fire Song", "Small Fire"]
    assert [m.occurrences for m in matches] == [5, 3]
    assert matches[1].contexts[0] == "small Fire, fire"


def test_resolve_not_found_is_none(resolver):
    assert resolver.resolve("ocean") is None


def test_format_matches():
    text = format_matches([SongMatch("Band C", "Love", ["love is"])])
    assert text.splitlines() == [
        "Result #1 has 1 occurrences:",
        "",
        "",
        "Title: Love",
        "Artist: Band C",
        "Context: love is",
    ]


def scripted(lines):
    it = iter(lines)

    def fake_input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return fake_input


def test_search_loop_until_sentinel(resolver):
    out = []
    served = run_search_loop(resolver, input_fn=scripted(["ocean", "love", "EXIT", "fire"]),
                             output_fn=out.append)
    assert served == 2
    assert out[0] == "Word not found."
    assert out[1].startswith("Result #1 has 3 occurrences:")


def test_search_loop_sentinel_is_exact(resolver):
    out = []
    served = run_search_loop(resolver, sentinel="EXIT", input_fn=scripted(["exit"]),
                             output_fn=out.append)
    assert served == 1
    assert out == ["Word not found."]


def test_main_missing_corpus(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "none.yaml"), "--data", str(tmp_path / "missing.csv")])
    assert code == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_main_rejects_bad_top_n(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "none.yaml"), "--top-n", "0"])
    assert code == 1
    assert "top_n" in capsys.readouterr().err


def test_main_end_to_end(tmp_path, monkeypatch, capsys):
    data = tmp_path / "songdata.csv"
    data.write_text(
        "artist,song,link,text\n"
        'Band C,Love,/c/love,"love is love love"\n',
        encoding="utf-8",
    )
    monkeypatch.setattr("builtins.input", scripted(["LOVE", "EXIT"]))
    code = main(["--config", str(tmp_path / "none.yaml"), "--data", str(data), "--context", "1"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Result #1 has 3 occurrences:" in out
    assert "Context: is love love" in out


def test_main_bad_corpus_format(tmp_path, capsys):
    data = tmp_path / "songdata.csv"
    data.write_text("name,text\nx,y\n", encoding="utf-8")
    code = main(["--config", str(tmp_path / "none.yaml"), "--data", str(data)])
    assert code == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_main_empty_corpus_file(tmp_path, capsys):
    data = tmp_path / "songdata.csv"
    data.write_text("", encoding="utf-8")
    code = main(["--config", str(tmp_path / "none.yaml"), "--data", str(data)])
    assert code == 1
    assert "[ERROR]" in capsys.readouterr().err


@pytest.mark.parametrize("body", [
    "search: [unclosed\n",
    "search:\n  top_n:\n",
])
def test_main_bad_config_file(tmp_path, capsys, body):
    config = tmp_path / "config.yaml"
    config.write_text(body)
    code = main(["--config", str(config), "--data", str(tmp_path / "missing.csv")])
    assert code == 1
    assert "[ERROR] bad configuration" in capsys.readouterr().err


def test_build_time_counts_from_given_start(songs, caplog, monkeypatch):
    monkeypatch.setattr("lyricseeker.search.time.perf_counter", lambda: 12.5)
    with caplog.at_level("INFO", logger="lyricseeker.search"):
        QueryResolver.build(songs, started=10.0)
    assert "Data structure built. Time: 2.500 seconds" in caplog.text
