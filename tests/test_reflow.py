import pytest

from lrc_extended.lrc.model import Line, LyricsDocument, Token
from lrc_extended.lrc.parse import parse_lrc
from lrc_extended.lrc.reflow import line_end, reflow, reflow_tokens


def _times(line):
    return [tok.time for tok in line.tokens]


def test_overrun_is_compressed_proportionally():
    doc = parse_lrc("[00:00.00]<00:00.00>a<00:01.00>b<00:10.00>c\n[00:02.00]<00:02.00>next\n")
    out = reflow(doc)
    assert _times(out.lines[0]) == pytest.approx([0.0, 0.2, 2.0])
    assert out.lines[1] == doc.lines[1]


def test_equal_times_pushed_apart_by_min_gap():
    doc = parse_lrc("[00:01.00]<00:01.00>a<00:01.00>b<00:01.00>c\n[00:05.00]d\n")
    out = reflow(doc)
    assert _times(out.lines[0]) == pytest.approx([1.0, 1.02, 1.04])


def test_custom_min_gap():
    doc = parse_lrc("[00:01.00]<00:01.00>a<00:01.00>b\n[00:05.00]d\n")
    out = reflow(doc, min_gap=0.5)
    assert _times(out.lines[0]) == pytest.approx([1.0, 1.5])


def test_tokens_stay_within_line_end():
    doc = parse_lrc(
        "[00:01.00]<00:01.00>a<00:02.00>b<00:04.00>c\n"
        "[00:03.00]<00:03.00>d<00:09.00>e\n"
        "[00:05.00]<00:05.00>f\n"
    )
    out = reflow(doc)
    for i, line in enumerate(out.lines):
        end = line_end(out.lines, i)
        times = _times(line)
        assert times[-1] <= end + 1e-9
        assert all(b - a >= 0.02 - 1e-9 for a, b in zip(times, times[1:]))


def test_squeeze_keeps_min_gap_between_close_words():
    tokens = (Token(0.0, "a"), Token(0.05, "b"), Token(10.0, "c"))
    out = reflow_tokens(tokens, end=1.0)
    times = [tok.time for tok in out]
    assert times[0] == 0.0
    assert times[-1] == pytest.approx(1.0)
    assert all(b - a >= 0.02 - 1e-9 for a, b in zip(times, times[1:]))


def test_no_room_spreads_evenly():
    tokens = (Token(0.0, "a"), Token(0.5, "b"), Token(1.0, "c"))
    out = reflow_tokens(tokens, end=0.02)
    assert [tok.time for tok in out] == pytest.approx([0.0, 0.01, 0.02])


def test_idempotent():
    doc = parse_lrc(
        "[00:00.00]<00:00.00>a<00:01.00>b<00:10.00>c\n"
        "[00:02.00]<00:02.00>d<00:02.00>e<00:02.01>f\n"
        "[00:02.03]<00:02.03>g<00:02.50>h<00:09.00>i\n"
        "[00:04.00][Outro]\n"
    )
    once = reflow(doc)
    twice = reflow(once)
    for a, b in zip(once.lines, twice.lines):
        assert _times(a) == pytest.approx(_times(b))


def test_label_and_metadata_untouched():
    doc = parse_lrc("[ti:Song]\n[Intro]\n[00:01.00]<00:01.00>a<00:02.00>b\n")
    out = reflow(doc)
    assert out.title == "Song"
    assert out.lines[0] == doc.lines[0]
    assert out.lines[1] == doc.lines[1]


def test_label_anchored_to_previous_line_is_a_deadline():
    doc = parse_lrc(
        "[00:01.00]<00:01.00>a<00:05.00>b\n"
        "[Chorus]\n"
        "[00:30.00]c\n"
    )
    out = reflow(doc)
    assert line_end(doc.lines, 0) == pytest.approx(1.02)
    assert _times(out.lines[0]) == pytest.approx([1.0, 1.02])


def test_unanchored_label_is_skipped_for_the_deadline():
    first = Line(start_time=1.0, tokens=(Token(1.0, "a"), Token(5.0, "b")))
    doc = LyricsDocument(
        lines=(first, Line(label="Bridge"), Line(start_time=30.0, tokens=(Token(30.0, "c"),)))
    )
    assert line_end(doc.lines, 0) == 30.0
    assert reflow(doc).lines[0] == first


def test_timed_label_is_a_deadline():
    doc = parse_lrc("[00:01.00]<00:01.00>a<00:04.00>b\n[00:02.00][Chorus]\n")
    out = reflow(doc)
    assert _times(out.lines[0]) == pytest.approx([1.0, 2.0])


def test_last_line_keeps_its_tail():
    doc = parse_lrc("[00:01.00]<00:01.00>a<00:03.00>b\n")
    out = reflow(doc)
    assert _times(out.lines[0]) == [1.0, 3.0]


def test_single_token_untouched():
    line = Line(start_time=1.0, tokens=(Token(1.0, "x"),))
    doc = LyricsDocument(lines=(line,))
    assert reflow(doc).lines[0] is line


def test_empty_document():
    doc = LyricsDocument()
    assert reflow(doc) is doc


def test_line_end_minimum_window():
    doc = parse_lrc("[00:02.00]<00:02.00>a<00:03.00>b\n[00:01.00]c\n")
    assert line_end(doc.lines, 0) == pytest.approx(2.02)


def test_reflow_of_reflowed_document_is_equal():
    doc = parse_lrc(
        "[ti:T]\n"
        "[00:00.00]<00:00.00>a<00:01.00>b<00:10.00>c\n"
        "[00:02.00]<00:02.00>d<00:02.00>e\n"
        "[00:05.00]f\n"
    )
    once = reflow(doc)
    assert reflow(once) == once
