"""Tests for comment stripping and line normalization."""

from clonestream.detection.normalizer import CommentState, normalize_lines, strip_line


def texts(contents):
    return [line.text for line in normalize_lines(contents)]


class TestStripLine:
    """Test the per-line comment scanner."""

    def test_plain_line_trimmed(self):
        assert strip_line("   int a = 1;  ", CommentState.OUTSIDE) == (
            "int a = 1;",
            CommentState.OUTSIDE,
        )

    def test_line_comment_removed(self):
        text, state = strip_line("int a = 1; // the answer", CommentState.OUTSIDE)
        assert text == "int a = 1;"
        assert state is CommentState.OUTSIDE

    def test_inline_block_comments_removed(self):
        text, state = strip_line("/* a */ foo(); /* b */", CommentState.OUTSIDE)
        assert text == "foo();"
        assert state is CommentState.OUTSIDE

    def test_block_comment_inside_statement(self):
        text, _ = strip_line("int x = /* inline */ 5;", CommentState.OUTSIDE)
        assert text == "int x =  5;"

    def test_open_comment_sets_inside(self):
        text, state = strip_line("int y = 2; /* starts here", CommentState.OUTSIDE)
        assert text == "int y = 2;"
        assert state is CommentState.INSIDE_COMMENT

    def test_inside_without_close_is_empty(self):
        assert strip_line("int z = 3;", CommentState.INSIDE_COMMENT) == (
            "",
            CommentState.INSIDE_COMMENT,
        )

    def test_close_keeps_trailing_code(self):
        text, state = strip_line("  still comment */ z = 4;", CommentState.INSIDE_COMMENT)
        assert text == "z = 4;"
        assert state is CommentState.OUTSIDE

    def test_close_then_reopen(self):
        text, state = strip_line("*/ /* reopened", CommentState.INSIDE_COMMENT)
        assert text == ""
        assert state is CommentState.INSIDE_COMMENT

    def test_open_marker_inside_line_comment_ignored(self):
        text, state = strip_line("// see /* here", CommentState.OUTSIDE)
        assert text == ""
        assert state is CommentState.OUTSIDE

    def test_whitespace_only_is_empty(self):
        assert strip_line(" \t ", CommentState.OUTSIDE) == ("", CommentState.OUTSIDE)


class TestNormalizeLines:
    """Test whole-file normalization."""

    def test_one_source_line_per_physical_line(self):
        lines = normalize_lines("a;\n\nb;")
        assert [(line.number, line.text) for line in lines] == [(1, "a;"), (2, ""), (3, "b;")]

    def test_crlf_and_lf_both_split(self):
        assert texts("a;\r\nb;\nc;") == ["a;", "b;", "c;"]

    def test_multiline_comment_spanning(self):
        contents = "\n".join(
            [
                "int a = 1;",
                "/* start",
                "   middle",
                "end */ int b = 2;",
                "int c = 3;",
            ]
        )
        assert texts(contents) == ["int a = 1;", "", "", "int b = 2;", "int c = 3;"]

    def test_javadoc_block(self):
        contents = "\n".join(
            [
                "/**",
                " * Adds numbers.",
                " * @param a first",
                " */",
                "int add(int a) {",
            ]
        )
        assert texts(contents) == ["", "", "", "", "int add(int a) {"]

    def test_comment_state_not_shared_between_calls(self):
        normalize_lines("/* never closed\nstill open")
        assert texts("int a;") == ["int a;"]

    def test_reopened_comment_continues(self):
        contents = "/* one\n*/ /* two\nhidden();\n*/ shown();"
        assert texts(contents) == ["", "", "", "shown();"]

    def test_has_content(self):
        lines = normalize_lines("x;\n// only comment")
        assert lines[0].has_content()
        assert not lines[1].has_content()

    def test_normalizing_normalized_text_is_stable(self):
        contents = "int a; // one\n\n/* two */ int b;\nint c;\n"
        first = [line.text for line in normalize_lines(contents) if line.has_content()]
        second = [line.text for line in normalize_lines("\n".join(first)) if line.has_content()]
        assert first == second == ["int a;", "int b;", "int c;"]

    def test_source_line_equality_ignores_number(self):
        a, b = normalize_lines("x = 1;\n\nx = 1;")[0::2]
        assert a.number != b.number
        assert a == b
        assert hash(a) == hash(b)
