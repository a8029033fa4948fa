"""Tests for styling macros, \\pic and fill-in-the-blank inputs."""

import pytest

from texmark.core.config import get_settings
from texmark.core.errors import PicDataError
from texmark.macros import MONOSPACE_SPAN, PicSpec, fill_in_blank_stage
from texmark.pipeline import render_latex
from texmark.resources import QuestionType


class TestStyleMacros:
    """Test each styling macro in isolation."""

    @pytest.mark.parametrize(
        "markup, expected",
        [
            ("\\textbf{hi}", "<span class='font-bold'>hi</span>"),
            ("\\textit{hi}", "<span class='italic'>hi</span>"),
            ("\\underline{hi}", "<span class='underline underline-offset-auto'>hi</span>"),
            ("\\fontsize[20px]{hi}", "<span style='font-size: 20px'>hi</span>"),
            ("\\textsuperscript{2}", "<sup>2</sup>"),
            ("\\textsubscript{2}", "<sub>2</sub>"),
            ("\\indent[2em]{hi}", "<span style='margin-left: 2em'>hi</span>"),
            ("\\centerline{hi}", "<p class='text-center'>hi</p>"),
            ("\\rightline{hi}", "<p class='text-right'>hi</p>"),
            ("\\textcolor[red]{hi}", "<span style='color: red'>hi</span>"),
        ],
    )
    def test_macro_expansion(self, markup, expected):
        """Test that each macro expands to its HTML fragment."""
        assert render_latex(markup) == expected

    def test_verb_and_texttt_are_monospace(self):
        """Test that \\verb and \\texttt share the monospace span."""
        assert render_latex("\\verb|x = 1|") == MONOSPACE_SPAN.format("x = 1")
        assert render_latex("\\texttt{x = 1}") == MONOSPACE_SPAN.format("x = 1")

    def test_surrounding_text_kept(self):
        """Test that text around a macro is preserved."""
        assert render_latex("a \\textbf{b} c") == "a <span class='font-bold'>b</span> c"

    def test_non_greedy_capture(self):
        """Test that two macros on one line expand separately."""
        out = render_latex("\\textbf{a} and \\textbf{b}")
        assert out == "<span class='font-bold'>a</span> and <span class='font-bold'>b</span>"

    def test_inner_macro_of_later_stage(self):
        """Test that an inner macro from an earlier stage nests correctly."""
        out = render_latex("\\textcolor[blue]{\\textbf{x}}")
        assert out == "<span style='color: blue'><span class='font-bold'>x</span></span>"

    def test_unknown_macro_is_literal(self):
        """Test that macros outside the vocabulary stay literal."""
        assert render_latex("\\emph{x}") == "\\emph{x}"

    def test_unclosed_macro_is_literal(self):
        """Test that an unclosed macro is not an error."""
        assert render_latex("\\textbf{x") == "\\textbf{x"

    def test_math_inside_macro(self, engine):
        """Test that math inside a macro is rendered before the macro."""
        out = render_latex("\\textbf{$x$}", engine=engine)
        assert out == "<span class='font-bold'><math display=\"inline\">x</math></span>"


class TestPic:
    """Test the \\pic picture macro."""

    def test_defaults(self):
        """Test the default layout and max height."""
        out = render_latex('\\pic{"url": "a.png", "alt": "A"}')
        assert out == (
            "<div class='mx-2 my-8'><img style='max-height: 300px;' "
            "class='mx-auto dark:invert-[0.9]' src='a.png' alt='A'/></div>"
        )

    def test_inline_and_max_height(self):
        """Test the inline layout flag and explicit max height."""
        out = render_latex('\\pic{"url": "a.png", "alt": "A", "maxHeight": 120, "isInline": true}')
        assert out.startswith("<div class='inline-block'><img style='max-height: 120px;'")

    def test_zero_max_height_uses_default(self):
        """Test that a zero max height falls back to the default."""
        out = render_latex('\\pic{"url": "a.png", "maxHeight": 0}')
        assert "max-height: 300px;" in out

    def test_missing_alt(self):
        """Test that a missing alt renders as empty."""
        assert "alt=''" in render_latex('\\pic{"url": "a.png"}')

    def test_invalid_json_falls_back(self):
        """Test that malformed JSON renders the fallback text."""
        assert render_latex("\\pic{url: a.png}") == get_settings().PIC_ERROR_TEXT

    def test_missing_url_falls_back(self):
        """Test that a picture without url renders the fallback text."""
        assert render_latex('\\pic{"alt": "A"}') == "Image could not be loaded"

    def test_pic_nested_in_bold_falls_back(self):
        """Test that bold captures up to the first brace, leaving \\pic without valid JSON."""
        out = render_latex('\\textbf{\\pic{"url": "a.png"}}')
        assert out == "<span class='font-bold'>Image could not be loaded"

    def test_truthy_non_bool_inline_falls_back(self):
        """Test that an isInline value that is not a boolean renders the fallback text."""
        assert render_latex('\\pic{"url": "a.png", "isInline": "yes please"}') == "Image could not be loaded"

    def test_parse_raises_pic_data_error(self):
        """Test that parse failures raise PicDataError."""
        with pytest.raises(PicDataError) as exc_info:
            PicSpec.parse('"url": ')
        assert exc_info.value.details["fragment"] == '"url": '

    def test_parse_aliases(self):
        """Test that camelCase keys map onto the model fields."""
        spec = PicSpec.parse('"url": "a.png", "maxHeight": 50, "isInline": true')
        assert spec.max_height == 50
        assert spec.is_inline is True


class TestFillInBlank:
    """Test bracket replacement for fill-in-the-blank questions."""

    def test_indices_left_to_right(self):
        """Test that blanks are indexed from 0 in reading order."""
        out = render_latex("[blank] and [blank]", question_type=QuestionType.FILL_IN_BLANK)
        assert out == '<input id="replace" index=0></input> and <input id="replace" index=1></input>'

    def test_plain_string_question_type(self):
        """Test that a plain string question type is accepted."""
        out = render_latex("[a]", question_type="FILL_IN_BLANK")
        assert out == '<input id="replace" index=0></input>'

    def test_counter_spans_lines(self):
        """Test that the counter is shared across lines."""
        out = render_latex("[a]\n[b]", question_type="FILL_IN_BLANK")
        assert out == '<input id="replace" index=0></input> <br /> <input id="replace" index=1></input>'

    @pytest.mark.parametrize("question_type", [None, QuestionType.MULTIPLE_CHOICE, "SHORT_ANSWER"])
    def test_other_types_unchanged(self, question_type):
        """Test that brackets stay literal for other question types."""
        assert render_latex("[blank] and [blank]", question_type=question_type) == "[blank] and [blank]"

    def test_counter_is_per_call(self):
        """Test that each render starts counting at 0."""
        first = render_latex("[a]", question_type="FILL_IN_BLANK")
        second = render_latex("[a]", question_type="FILL_IN_BLANK")
        assert first == second == '<input id="replace" index=0></input>'

    def test_counter_is_per_stage(self):
        """Test that each stage owns its counter."""
        stage_a = fill_in_blank_stage(QuestionType.FILL_IN_BLANK)
        stage_b = fill_in_blank_stage(QuestionType.FILL_IN_BLANK)
        assert stage_a.apply("[x][y]") == '<input id="replace" index=0></input><input id="replace" index=1></input>'
        assert stage_b.apply("[x]") == '<input id="replace" index=0></input>'
