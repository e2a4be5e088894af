"""Tests for shell command line splitting."""

import pytest

from bucketsh.repl.tokenizer import split_args, split_partial


class TestSplitArgs:
    """Whitespace and quote handling."""

    def test_empty_line(self):
        assert split_args("") == []

    def test_blank_line(self):
        assert split_args("   \t ") == []

    def test_single_word(self):
        assert split_args("one") == ["one"]

    def test_any_whitespace_separates(self):
        assert split_args(" one\ttwo  three") == ["one", "two", "three"]

    def test_quoted_argument(self):
        assert split_args(' "all as one" ') == ["all as one"]

    def test_mixed_quoted_and_plain(self):
        assert split_args('single "all as one" single') == ["single", "all as one", "single"]

    def test_quote_inside_word_joins(self):
        assert split_args('where do"I begin?"') == ["where", "doI begin?"]

    def test_text_after_closing_quote_joins(self):
        assert split_args('"one"two three') == ["onetwo", "three"]

    def test_unterminated_quote_runs_to_end(self):
        assert split_args('"do I end?') == ["do I end?"]

    def test_escaped_quote_inside_quotes(self):
        assert split_args(r'put k "say \"hi\""') == ["put", "k", 'say "hi"']

    def test_other_backslashes_kept(self):
        assert split_args(r'"C:\temp\dir"') == [r"C:\temp\dir"]

    def test_backslash_outside_quotes_is_literal(self):
        assert split_args(r'a\"b"') == ["a\\b"]

    def test_trailing_backslash_in_quotes(self):
        assert split_args('"abc\\') == ["abc\\"]

    def test_empty_quotes_mid_line_give_empty_argument(self):
        assert split_args('put k "" x') == ["put", "k", "", "x"]

    def test_empty_quotes_at_end_are_dropped(self):
        assert split_args('put k ""') == ["put", "k"]

    @pytest.mark.parametrize("line,expected", [
        ("ls", ["ls"]),
        ("cd ../people", ["cd", "../people"]),
        ('put "first name" Ada', ["put", "first name", "Ada"]),
        ("  get   key  ", ["get", "key"]),
    ])
    def test_command_lines(self, line, expected):
        assert split_args(line) == expected


class TestSplitPartial:
    """Splitting a line that is still being typed."""

    @pytest.mark.parametrize("line,expected", [
        ("", ([], None, False)),
        ("l", ([], "l", False)),
        ("ls ", (["ls"], None, False)),
        ("cd pe", (["cd"], "pe", False)),
        ('cd "my b', (["cd"], "my b", True)),
        ('cd "my ', (["cd"], "my ", True)),
        ('cd "', (["cd"], "", True)),
        ('cd "my bucket"/sub', (["cd"], "my bucket/sub", False)),
        ('cd "my bucket" ', (["cd", "my bucket"], None, False)),
    ])
    def test_partial_lines(self, line, expected):
        assert split_partial(line) == expected

    def test_finished_arguments_match_split_args(self):
        line = 'put "first name" Ada'
        args, partial, _ = split_partial(line)
        assert args + [partial] == split_args(line)
