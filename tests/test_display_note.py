from core import DisplayNote


def test_short_note_is_trimmed_but_not_truncated():
    note = DisplayNote.make("/notes/Groceries.txt", "\n\n  eggs\nmilk  \n\n")
    assert note.title == "Groceries"
    assert note.text == "eggs\nmilk"
    assert not note.is_truncated


def test_title_drops_only_the_last_extension():
    note = DisplayNote.make("/notes/trip.2024.txt", "x")
    assert note.title == "trip.2024"


def test_line_limit_keeps_first_lines_and_appends_ellipsis():
    raw = "\n".join(f"line {i}" for i in range(1, 31))
    note = DisplayNote.make("a.txt", raw, max_lines=25)
    assert note.is_truncated
    assert note.text.split("\n")[0] == "line 1"
    assert note.text.endswith("line 25…")
    assert "line 26" not in note.text


def test_exactly_max_lines_is_not_truncated():
    raw = "\n".join(str(i) for i in range(25))
    note = DisplayNote.make("a.txt", raw, max_lines=25)
    assert not note.is_truncated
    assert note.text == raw


def test_blank_lines_count_towards_the_line_limit():
    raw = "top" + "\n" * 30 + "bottom"
    note = DisplayNote.make("a.txt", raw, max_lines=25)
    assert note.is_truncated
    assert note.text == "top…"


def test_character_limit_caps_output():
    note = DisplayNote.make("a.txt", "a" * 900, max_characters=800)
    assert note.is_truncated
    assert note.text == "a" * 800 + "…"


def test_output_never_exceeds_character_limit_plus_ellipsis():
    for length in (0, 1, 799, 800, 801, 5000):
        raw = ("word " * length)[:length]
        note = DisplayNote.make("a.txt", raw, max_characters=800)
        assert len(note.text) <= 801


def test_existing_ellipsis_is_not_doubled():
    raw = "a" * 799 + "…" + "b" * 10
    note = DisplayNote.make("a.txt", raw, max_characters=800)
    assert note.is_truncated
    assert note.text == "a" * 799 + "…"


def test_whitespace_at_the_cut_is_removed_before_ellipsis():
    raw = "a" * 795 + "     " + "b" * 100
    note = DisplayNote.make("a.txt", raw, max_characters=800)
    assert note.text == "a" * 795 + "…"


def test_empty_file():
    note = DisplayNote.make("empty.txt", "   \n ")
    assert note.text == ""
    assert not note.is_truncated


def test_windows_line_endings_are_normalized():
    note = DisplayNote.make("a.txt", "first\r\nsecond\r\nthird\r\n", max_lines=2)
    assert note.text == "first\nsecond…"
    assert "\r" not in note.text
