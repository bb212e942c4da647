"""Markup scanner tests.

The scanner feeds every collector, so these pin down line positions,
self-closing detection and raw-text handling on real markup snippets.
"""

from markfold.markup import MarkupScanner, TokenKind


def scan(*lines):
    return MarkupScanner().tokenize("\n".join(lines))


def kinds_and_names(tokens):
    return [(t.kind, t.name) for t in tokens]


class TestTags:
    """Opening and closing tags."""

    def test_open_and_close_lines(self):
        tokens = scan("<html>", "Hello", "</html>")
        assert kinds_and_names(tokens) == [
            (TokenKind.OPEN_TAG, "html"),
            (TokenKind.CLOSE_TAG, "html"),
        ]
        assert (tokens[0].start_line, tokens[0].end_line) == (0, 0)
        assert tokens[1].start_line == 2

    def test_names_are_lowercased(self):
        tokens = scan("<DIV>", "</Div>")
        assert kinds_and_names(tokens) == [
            (TokenKind.OPEN_TAG, "div"),
            (TokenKind.CLOSE_TAG, "div"),
        ]

    def test_several_tags_on_one_line(self):
        tokens = scan("<be><div>")
        assert kinds_and_names(tokens) == [
            (TokenKind.OPEN_TAG, "be"),
            (TokenKind.OPEN_TAG, "div"),
        ]

    def test_attributes_parsed(self):
        (token,) = scan('<body class="f" data-x=\'1\' hidden id=main>')
        assert token.attributes == {"class": "f", "data-x": "1", "hidden": "", "id": "main"}

    def test_quoted_attribute_may_contain_gt(self):
        tokens = scan('<a title="a > b">', "</a>")
        assert kinds_and_names(tokens) == [
            (TokenKind.OPEN_TAG, "a"),
            (TokenKind.CLOSE_TAG, "a"),
        ]

    def test_tag_wrapping_across_lines(self):
        tokens = scan('<img class="c"', '     src="top"', ">")
        (token,) = tokens
        assert (token.start_line, token.end_line) == (0, 2)
        assert token.spans_lines

    def test_stray_less_than_is_text(self):
        tokens = scan("a < b", "<p>", "</p>")
        assert kinds_and_names(tokens) == [
            (TokenKind.OPEN_TAG, "p"),
            (TokenKind.CLOSE_TAG, "p"),
        ]

    def test_doctype_skipped(self):
        tokens = scan("<!DOCTYPE html>", "<?xml version='1.0'?>", "<html>")
        assert kinds_and_names(tokens) == [(TokenKind.OPEN_TAG, "html")]

    def test_unterminated_tag_at_end_of_input(self):
        (token,) = scan("<div", "  class='x'")
        assert token.kind == TokenKind.OPEN_TAG
        assert token.end_line == 1
        assert not token.self_closing


class TestSelfClosing:
    """Explicit ``/>`` and void elements complete on their own."""

    def test_explicit_self_close(self):
        (token,) = scan('<a href="top"/>')
        assert token.self_closing

    def test_void_elements(self):
        tokens = scan('<img src="s">', "<br/>", "<br>", "<div>")
        assert [t.self_closing for t in tokens] == [True, True, True, False]


class TestComments:
    """Comment tokens."""

    def test_multi_line_comment(self):
        (token,) = scan("<!--", " multi line", "-->")
        assert token.kind == TokenKind.COMMENT
        assert (token.start_line, token.end_line) == (0, 2)
        assert token.text == "\n multi line\n"

    def test_single_line_comment_text(self):
        (token,) = scan("<!-- #region -->")
        assert token.text == " #region "
        assert not token.spans_lines

    def test_tags_inside_comment_ignored(self):
        tokens = scan("<!-- <div> -->", "<p>")
        assert kinds_and_names(tokens) == [
            (TokenKind.COMMENT, ""),
            (TokenKind.OPEN_TAG, "p"),
        ]

    def test_unterminated_comment_runs_to_end(self):
        (token,) = scan("<p>", "<!-- open", "<div>", "text")[1:]
        assert token.kind == TokenKind.COMMENT
        assert (token.start_line, token.end_line) == (1, 3)


class TestRawText:
    """Script and style bodies produce no tokens."""

    def test_script_content_not_scanned(self):
        tokens = scan("<script>", "if (a < b) { x = '<div>'; }", "</script>", "<p>")
        assert kinds_and_names(tokens) == [
            (TokenKind.OPEN_TAG, "script"),
            (TokenKind.CLOSE_TAG, "script"),
            (TokenKind.OPEN_TAG, "p"),
        ]
        assert tokens[1].start_line == 2

    def test_closing_tag_case_insensitive(self):
        tokens = scan("<style>", "a { }", "</STYLE>")
        assert kinds_and_names(tokens)[-1] == (TokenKind.CLOSE_TAG, "style")

    def test_unclosed_script_swallows_rest(self):
        tokens = scan("<script>", "var x = '<b>';", "<div>")
        assert kinds_and_names(tokens) == [(TokenKind.OPEN_TAG, "script")]

    def test_script_prefix_not_a_close(self):
        """``</scripts`` does not end a script element."""
        tokens = scan("<script>", "s = '</scripts>';", "</script>")
        assert [t.start_line for t in tokens] == [0, 2]
