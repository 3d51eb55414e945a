from parsers.matcher import (
    CategoryFragment,
    DateFragment,
    associate,
    find_categories,
    find_tails,
    match,
    nearest,
    nearest_preceding,
)
from parsers.normalizer import normalize


ROW = (
    "Saturday 13 December, 2025 solidcore Signature50: Full Body "
    "MA, Arsenal Yards w/ Nikki Gagliano - Senior Master 8:00am EST (50 min)"
)
NEXT_ROW = (
    "Friday 12 December, 2025 solidcore Focus50: Arms & Abs "
    "MA, Back Bay w/ Sam Lee 6:30pm EST (50 min)"
)
TAIL = "MA, Arsenal Yards w/ Nikki Gagliano 8:00am EST (50 min)"


def test_single_row():
    [c] = match(normalize(ROW))
    assert (c.day, c.month, c.year) == ("13", "December", "2025")
    assert c.code == "Signature50"
    assert c.variant == "Full Body"
    assert (c.region, c.location) == ("MA", "Arsenal Yards")
    assert c.instructor == "Nikki Gagliano - Senior Master"
    assert (c.time, c.duration) == ("8:00am", "50")
    assert c.source == "entry"


def test_day_after_month():
    [c] = match("Saturday, December 13, 2025 solidcore Signature50: Full Body " + TAIL)
    assert (c.day, c.month, c.year) == ("13", "December", "2025")


def test_rows_are_matched_in_text_order():
    found = match(normalize(ROW + "\n" + NEXT_ROW))
    assert [c.day for c in found] == ["13", "12"]
    assert found[1].variant == "Arms & Abs"
    assert found[1].instructor == "Sam Lee"


def test_cancelled_row_is_excluded():
    found = match(normalize(NEXT_ROW + "\n" + ROW + " Late Cancel"))
    assert [c.day for c in found] == ["12"]


def test_status_between_close_rows_cancels_both():
    assert match(normalize(ROW + " Cancelled\n" + NEXT_ROW)) == []
    assert match(normalize(ROW + " Completed Cancelled\n" + NEXT_ROW)) == []


def test_cancel_window_is_a_hundred_chars_each_side():
    assert match(ROW + " " + "-" * 89 + " Cancelled") == []
    assert [c.day for c in match(ROW + " " + "-" * 90 + " Cancelled")] == ["13"]
    assert match("Cancelled " + "-" * 89 + " " + ROW) == []
    assert [c.day for c in match("Cancelled " + "-" * 90 + " " + ROW)] == ["13"]


def test_denylisted_activity_is_excluded():
    text = "Saturday 13 December, 2025 solidcore Signature50: Open Studio " + TAIL
    assert match(text) == []


def test_broken_row_falls_back_to_association():
    text = "Saturday 13 December, 2025 solidcore Signature50: Full Body (Page 2 of 5) " + TAIL
    [c] = match(text)
    assert c.source == "associated"
    assert (c.day, c.month, c.year) == ("13", "December", "2025")
    assert c.code == "Signature50"
    assert c.variant == "Full Body"
    assert c.category_offset == text.index("solidcore")


def test_association_without_category_uses_fallback_code():
    text = "Saturday 13 December, 2025 (Page 2 of 5) " + TAIL
    [c] = match(text)
    assert c.code == "Signature50"
    assert c.category_offset is None


def test_tail_without_preceding_date_is_dropped():
    assert match(TAIL + " Saturday 13 December, 2025") == []


def test_date_too_far_away_is_ignored():
    assert match("Saturday 13 December, 2025 " + "-" * 600 + " " + TAIL) == []


def test_nearest_preceding_is_strictly_before():
    dates = [DateFragment("1", "May", "2025", 10), DateFragment("2", "May", "2025", 50)]
    assert nearest_preceding(dates, 50, 500).start == 10
    assert nearest_preceding(dates, 51, 500).start == 50
    assert nearest_preceding(dates, 10, 500) is None
    assert nearest_preceding(dates, 700, 500) is None


def test_nearest_category_tie_goes_left():
    cats = [CategoryFragment("Focus50", 90), CategoryFragment("Power30", 110)]
    assert nearest(cats, 100, 500).code == "Focus50"
    assert nearest(cats, 101, 500).code == "Power30"
    assert nearest(cats, 1000, 500) is None


def test_interleaved_broken_rows_each_take_their_own_date():
    row_a = "Saturday 13 December, 2025 solidcore Signature50: Full Body (p. 1) " + TAIL
    row_b = ("Sunday 14 December, 2025 solidcore Power30: Arms (p. 1) "
             "MA, Back Bay w/ Sam Lee 9:00am EST (30 min)")
    found = match(row_a + " " + row_b)
    assert [(c.day, c.code, c.source) for c in found] == [
        ("13", "Signature50", "associated"),
        ("14", "Power30", "associated"),
    ]


def test_tail_printed_before_its_date_takes_the_previous_date():
    # Nearest-preceding association is a heuristic: when a row's details
    # come out ahead of its own date, they bind to the row above.
    row_a = "Saturday 13 December, 2025 solidcore Signature50: Full Body (p. 1) " + TAIL
    orphan = "MA, Back Bay w/ Sam Lee 9:00am EST (30 min)"
    text = row_a + " " + orphan + " Sunday 14 December, 2025 solidcore Power30: Arms"
    found = match(text)
    assert [(c.day, c.instructor) for c in found] == [("13", "Nikki Gagliano"), ("13", "Sam Lee")]


def test_associate_drops_tail_without_date():
    [tail] = find_tails(TAIL)
    assert associate([tail], [], []) == []


def test_category_fragment_reads_its_variant():
    cats = find_categories("solidcore Signature50 Power30: Arms & Abs (p. 1) MA, Back Bay")
    assert [(c.code, c.variant) for c in cats] == [("Signature50", ""), ("Power30", "Arms & Abs")]
    [c] = find_categories("Focus50: Core MA, Back Bay")
    assert c.variant == "Core"


def test_associated_variant_is_checked_against_denylist():
    text = "Saturday 13 December, 2025 solidcore Signature50: Open Studio (Page 2 of 5) " + TAIL
    assert match(text) == []
