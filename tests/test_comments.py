"""Tests for comments module."""

from qmldoc.comments import CommentLocator
from qmldoc.models import CommentSpan


def source_with_comments(length, comments):
    """Build source text with block comments whose content spans the given ranges.

    Each (begin, end, sigil) entry places ``/*`` right before ``begin`` and
    starts the content with ``sigil``.
    """
    chars = [" "] * length
    for begin, end, sigil in comments:
        chars[begin - 2] = "/"
        chars[begin - 1] = "*"
        for i, char in enumerate(sigil):
            chars[begin + i] = char
        chars[end] = "*"
        chars[end + 1] = "/"
    return "".join(chars)


def test_nearest_comment_is_selected():
    source = source_with_comments(220, [(10, 50, "!"), (80, 120, "!")])
    locator = CommentLocator(source, [CommentSpan(10, 50), CommentSpan(80, 120)])
    locator.advance(60)

    assert locator.find_preceding(200) == CommentSpan(80, 120)


def test_comment_before_last_end_offset_is_not_found():
    source = source_with_comments(220, [(10, 50, "!")])
    locator = CommentLocator(source, [CommentSpan(10, 50)])
    locator.advance(60)

    assert locator.find_preceding(200) is None


def test_used_comment_stops_the_search():
    """Test that an older unused comment is not reachable past a used one."""
    source = source_with_comments(220, [(10, 50, "!"), (80, 120, "!")])
    locator = CommentLocator(source, [CommentSpan(10, 50), CommentSpan(80, 120)])
    locator.mark_used(CommentSpan(80, 120))

    assert locator.find_preceding(200) is None


def test_comment_overlapping_target_is_skipped():
    source = source_with_comments(220, [(10, 50, "!"), (80, 120, "!")])
    locator = CommentLocator(source, [CommentSpan(10, 50), CommentSpan(80, 120)])

    assert locator.find_preceding(100) == CommentSpan(10, 50)


def test_comment_ending_at_target_is_skipped():
    source = source_with_comments(220, [(80, 120, "!")])
    locator = CommentLocator(source, [CommentSpan(80, 120)])

    assert locator.find_preceding(120) is None


def test_comment_without_sigil_is_skipped():
    source = source_with_comments(220, [(10, 50, "!"), (80, 120, "x")])
    locator = CommentLocator(source, [CommentSpan(10, 50), CommentSpan(80, 120)])

    assert locator.find_preceding(200) == CommentSpan(10, 50)


def test_double_star_comment_is_documentation():
    source = source_with_comments(220, [(80, 120, "*")])
    locator = CommentLocator(source, [CommentSpan(80, 120)])

    assert locator.find_preceding(200) == CommentSpan(80, 120)


def test_line_comment_is_skipped():
    source = " " * 78 + "//!" + " " * 139
    locator = CommentLocator(source, [CommentSpan(80, 120)])

    assert locator.find_preceding(200) is None


def test_comments_are_scanned_in_source_order():
    source = source_with_comments(220, [(10, 50, "!"), (80, 120, "!")])
    locator = CommentLocator(source, [CommentSpan(80, 120), CommentSpan(10, 50)])

    assert locator.find_preceding(200) == CommentSpan(80, 120)


def test_text_strips_sigil():
    source = "/*! Hello */"
    locator = CommentLocator(source, [CommentSpan(2, 10)])

    assert locator.text(CommentSpan(2, 10)) == " Hello "


def test_advance_never_moves_back():
    locator = CommentLocator("", [])
    locator.advance(100)
    locator.advance(40)

    assert locator.last_end_offset == 100


def test_find_preceding_does_not_mark_used():
    source = source_with_comments(220, [(80, 120, "!")])
    locator = CommentLocator(source, [CommentSpan(80, 120)])

    assert locator.find_preceding(200) == CommentSpan(80, 120)
    assert locator.find_preceding(200) == CommentSpan(80, 120)
    assert locator.used == set()
