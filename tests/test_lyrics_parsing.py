from lrc_extended.lrc.model import NO_TIME, Token
from lrc_extended.lrc.parse import parse_lrc, parse_lrc_with_stats, parse_time


def test_header_last_one_wins():
    doc = parse_lrc("[ti:A]\n[ti:B]")
    assert doc.title == "B"
    assert doc.lines == ()


def test_headers_case_insensitive_and_trimmed():
    doc = parse_lrc("[AR: Someone ]\n[Al:Record]\n[by:me]\n")
    assert doc.artist == "Someone"
    assert doc.album == "Record"
    assert doc.by == "me"
    assert doc.title is None


def test_header_after_lyrics_still_updates_metadata():
    doc = parse_lrc("[00:01.00]hi\n[ti:Late]\n")
    assert doc.title == "Late"
    assert len(doc.lines) == 1


def test_word_tokens():
    doc = parse_lrc("[00:10.00]<00:10.00>Hello<00:11.50>World")
    assert len(doc.lines) == 1
    line = doc.lines[0]
    assert line.start_time == 10.0
    assert line.tokens == (Token(10.0, "Hello"), Token(11.5, "World"))
    assert line.label is None


def test_whole_line_fallback():
    doc = parse_lrc("[00:05.00]Just text")
    assert doc.lines[0].tokens == (Token(5.0, "Just text"),)


def test_whole_line_fallback_at_zero():
    doc = parse_lrc("[00:00.00]Intro words")
    assert doc.lines[0].tokens == (Token(0.0, "Intro words"),)


def test_bare_line_time():
    doc = parse_lrc("00:07.25 hello there")
    assert doc.lines[0].start_time == 7.25
    assert doc.lines[0].tokens == (Token(7.25, "hello there"),)


def test_comma_decimal_separator():
    doc = parse_lrc("[00:01,50]x <00:02,25>y")
    line = doc.lines[0]
    assert line.start_time == 1.5
    # text before the first word tag is not a token
    assert line.tokens == (Token(2.25, "y"),)


def test_minutes():
    doc = parse_lrc("[01:02.50]x")
    assert doc.lines[0].start_time == 62.5


def test_time_then_label():
    doc = parse_lrc("[00:10.00][Chorus]")
    line = doc.lines[0]
    assert line.start_time == 10.0
    assert line.label == "Chorus"
    assert line.tokens == ()


def test_remainder_label_is_reclassified():
    doc = parse_lrc("[00:04.00] [Bridge]")
    line = doc.lines[0]
    assert line.label == "Bridge"
    assert line.start_time == 4.0
    assert line.tokens == ()


def test_bare_label_anchored_to_last_timed_start():
    doc = parse_lrc("[Intro]\n[00:03.00]a\n[Chorus]\n")
    intro, lyric, chorus = doc.lines
    assert intro.label == "Intro"
    assert intro.start_time == NO_TIME
    assert lyric.start_time == 3.0
    assert chorus.label == "Chorus"
    assert chorus.start_time == 3.0


def test_unknown_bracket_key_becomes_label():
    doc = parse_lrc("[offset:500]")
    assert doc.lines[0].label == "offset:500"


def test_empty_word_text_dropped():
    doc = parse_lrc("[00:01.00]<00:01.00>  <00:02.00>hi")
    assert doc.lines[0].tokens == (Token(2.0, "hi"),)


def test_non_numeric_word_time_defaults_to_zero():
    doc = parse_lrc("[00:02.00]<ab:cd>word")
    assert doc.lines[0].tokens == (Token(0.0, "word"),)


def test_time_tag_alone_is_kept_as_anchor():
    doc = parse_lrc("[00:01.00]a\n[00:09.00]\n")
    anchor = doc.lines[1]
    assert anchor.start_time == 9.0
    assert anchor.tokens == ()
    assert anchor.label is None


def test_word_tags_without_line_time():
    doc = parse_lrc("<00:01.00>a <00:02.00>b")
    line = doc.lines[0]
    assert line.start_time == NO_TIME
    assert line.start == 1.0
    assert [tok.text for tok in line.tokens] == ["a", "b"]


def test_line_endings_and_blank_lines():
    doc = parse_lrc("[00:01.00]a\r\n\r\n[00:02.00]b\r[00:03.00]c\n\n")
    assert [ln.tokens[0].text for ln in doc.lines] == ["a", "b", "c"]


def test_unparseable_lines_ignored():
    doc = parse_lrc("just some text\n[00:01.00]a\n")
    assert len(doc.lines) == 1


def test_stats():
    doc, stats = parse_lrc_with_stats("[ti:T]\n\n[00:01.00]a\n[Chorus]\nnoise\n")
    assert doc.title == "T"
    assert stats.lines_total == 6
    assert stats.lines_blank == 2
    assert stats.header_lines == 1
    assert stats.lyric_lines == 1
    assert stats.label_lines == 1
    assert stats.tokens_total == 1
    assert stats.lines_ignored == 1


def test_parse_time_defaults():
    assert parse_time("01", "02.5") == 62.5
    assert parse_time("xx", "03") == 3.0
    assert parse_time("01", "") == 60.0


def test_tag_accessor_aliases():
    doc = parse_lrc("[ti:Song]\n[ar:Singer]\n")
    assert doc.tag("ti") == "Song"
    assert doc.tag("title") == "Song"
    assert doc.tag("SINGER") == "Singer"
    assert doc.tag("album") is None
    assert doc.tag("unknown") is None
    assert doc.tags == {"ti": "Song", "ar": "Singer"}
