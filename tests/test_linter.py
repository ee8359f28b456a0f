"""Tests for option handling and the fix loop."""

import pytest

from sort_keys_fix import FixError, InvalidOptionsError, verify, verify_and_fix
from sort_keys_fix import _linter
from sort_keys_fix._fixer import Edit, OverlappingEditsError, merge_edits
from sort_keys_fix._linter import Problem, apply_fixes, validate_options


@pytest.mark.parametrize(
    "options",
    [
        None,
        [],
        ["asc"],
        ["desc", {}],
        ["asc", {"caseSensitive": False, "natural": True, "minKeys": 3}],
    ],
)
def test_valid_options(options):
    assert validate_options(options) == list(options or [])


@pytest.mark.parametrize(
    "options",
    [
        ["up"],
        [None],
        ["asc", {"sorted": True}],
        ["asc", {"minKeys": 1}],
        ["asc", {"natural": "yes"}],
        ["asc", {}, {}],
    ],
)
def test_invalid_options(options):
    with pytest.raises(InvalidOptionsError, match="sort-keys-fix"):
        verify('x = {"a": 1}\n', options)


def test_invalid_options_are_rejected_before_fixing():
    with pytest.raises(InvalidOptionsError):
        verify_and_fix('x = {"b": 1, "a": 2}\n', ["asc", {"minKeys": 0}])


def test_merged_edits_keep_insertion_order_at_one_offset():
    edits = [Edit((1, 1), "x"), Edit((1, 1), "y"), Edit((3, 4), "Z")]
    assert merge_edits(edits, "abcde") == Edit((1, 4), "xybcZ")


def test_overlapping_edits_cannot_be_merged():
    with pytest.raises(OverlappingEditsError):
        merge_edits([Edit((0, 3), ""), Edit((2, 4), "")], "abcde")


def _problem(fix):
    return Problem("sort-keys-fix", "", 1, 1, 1, 1, fix)


def test_apply_fixes_skips_overlapping_fixes():
    problems = [
        _problem(Edit((0, 2), "AB")),
        _problem(Edit((1, 3), "??")),
        _problem(None),
        _problem(Edit((3, 4), "D")),
    ]
    assert apply_fixes("abcd", problems) == ("ABcD", 2)


def test_apply_fixes_treats_touching_fixes_as_overlapping():
    problems = [_problem(Edit((0, 2), "AB")), _problem(Edit((2, 3), "C"))]
    assert apply_fixes("abcd", problems) == ("ABcd", 1)


def test_syntax_errors_propagate():
    with pytest.raises(SyntaxError):
        verify("x = {\n")


def test_nested_containers_take_one_pass_each():
    text = 'x = {"b": {"d": 1, "c": 2}, "a": 0}\n'
    first = verify_and_fix(text, max_passes=1)
    assert first.passes == 1
    assert first.output == 'x = {"a": 0, "b": {"d": 1, "c": 2}}\n'
    assert len(first.problems) == 1

    result = verify_and_fix(text)
    assert result.passes == 2
    assert result.output == 'x = {"a": 0, "b": {"c": 2, "d": 1}}\n'
    assert result.problems == []


def test_nothing_to_fix():
    text = 'x = {"a": 1, "b": 2}\n'
    assert verify_and_fix(text) == (text, [], 0, False)


def test_fixing_non_ascii_source():
    text = 'x = {"é": 1, "a": 2}  # café\n'
    assert verify_and_fix(text).output == 'x = {"a": 2, "é": 1}  # café\n'


def test_broken_fix_is_reported(monkeypatch):
    monkeypatch.setattr(
        _linter,
        "apply_fixes",
        lambda text, problems: (text.replace("{", "{{", 1), 1),
    )
    with pytest.raises(FixError, match="pass 1"):
        verify_and_fix('x = {"b": 1, "a": 2}\n')


@pytest.mark.parametrize(
    "text",
    [
        'print(f"{dict(a=1)}")\n',
        "x = f\"{ {**base, 'a': 1} }\"\n",
        "x = f'{dict(b=1, a=2)!r:>{width}}'\n",
    ],
)
def test_dicts_inside_f_strings_do_not_break_fixing(text):
    result = verify_and_fix(text)
    assert result.problems == []
    assert result.output in (text, text.replace("b=1, a=2", "a=2, b=1"))
