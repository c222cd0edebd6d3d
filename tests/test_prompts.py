"""Tests for the terminal prompts."""

import pytest

from errors import FatalInputError, ValidationRejection
from ui import prompts


def scripted(*answers):
    it = iter(answers)

    def ask(_text):
        return next(it)
    return ask


class Out(list):
    def __call__(self, line):
        self.append(line)


class TestChoose:

    def test_picks_by_index(self):
        out = Out()
        value = prompts.choose([("a", 1), ("b", 2)], "Pick", ask=scripted("1"), out=out)
        assert value == 2
        assert "  [1] b" in out

    def test_reprompts_on_bad_index(self):
        out = Out()
        value = prompts.choose([("a", 1), ("b", 2)], "Pick", ask=scripted("x", "7", "0"), out=out)
        assert value == 1
        assert out.count("Please type a number between 0 and 1.") == 2

    def test_empty_answer_is_first_option(self):
        assert prompts.choose([("a", "A"), ("b", "B")], "Pick", ask=scripted(""), out=Out()) == "A"

    def test_eof_aborts(self):
        def ask(_text):
            raise EOFError
        with pytest.raises(FatalInputError):
            prompts.choose([("a", 1)], "Pick", ask=ask, out=Out())

    def test_nothing_to_choose(self):
        with pytest.raises(FatalInputError):
            prompts.choose([], "Pick", ask=scripted(), out=Out())


class TestConfirm:

    @pytest.mark.parametrize("answer,expected", [("", True), ("y", True), ("NO", False), ("n", False)])
    def test_answers(self, answer, expected):
        assert prompts.confirm("Group?", ask=scripted(answer), out=Out()) is expected

    def test_reprompts(self):
        out = Out()
        assert prompts.confirm("Group?", default=False, ask=scripted("maybe", ""), out=out) is False
        assert out == ["Please answer y or n."]


class TestThreshold:

    def test_default_on_empty(self):
        assert prompts.ask_threshold(164, ask=scripted(""), out=Out()) == 164

    def test_non_numeric_reprompts(self):
        out = Out()
        assert prompts.ask_threshold(164, ask=scripted("soon", "-3", "42.5"), out=out) == 42.5
        assert out == ["I was hoping for a number...", "I was hoping for a number..."]

    @pytest.mark.parametrize("raw", ["abc", "nan", "inf", "-1", "12abc"])
    def test_parse_rejects(self, raw):
        with pytest.raises(ValidationRejection):
            prompts.parse_threshold(raw)

    def test_parse_accepts(self):
        assert prompts.parse_threshold("0") == 0.0
        assert prompts.parse_threshold("80") == 80.0


def test_instrument_options_end_with_keyboard():
    options = prompts.instrument_options(["Keystation 49"], "Computer keyboard")
    assert options == [("Keystation 49", "Keystation 49"), ("Computer keyboard", None)]
