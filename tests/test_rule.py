"""Tests for detecting dict keys out of order."""

import pytest
from gen_sources import NAMES, Item, items, render
from hypothesis import given, strategies as st

from sort_keys_fix import verify

DESC_INSENSITIVE = ["desc", {"caseSensitive": False}]


@given(items(comments=False))
def test_sorted_segments_report_nothing(entries):
    # Sort the names between each pair of spreads.
    out, run = [], []
    for item in entries + [Item(None)]:
        if item.name is None:
            out.extend(sorted(run, key=lambda i: i.name))
            out.append(item)
            run = []
        else:
            run.append(item)
    assert verify(render(out[:-1])) == []


@given(st.lists(NAMES, min_size=1, max_size=8), st.sampled_from(["asc", "desc"]))
def test_names_sorted_under_the_configured_order_report_nothing(names, order):
    names.sort(reverse=order == "desc")
    text = render([Item(name) for name in names])
    assert verify(text, [order]) == []


@given(st.lists(NAMES, min_size=2, max_size=8, unique=True), st.data())
def test_one_swapped_pair_reports_once_at_the_later_entry(names, data):
    names.sort()
    i = data.draw(st.integers(0, len(names) - 2), label="swap")
    swapped = names[:i] + [names[i + 1], names[i]] + names[i + 2 :]
    problems = verify(render([Item(name) for name in swapped]))
    assert len(problems) == 1
    (problem,) = problems
    # Line 1 is "x = {", so entry n is on line n + 2.
    assert (problem.line, problem.column) == (i + 3, 5)
    assert problem.message.endswith(
        f"'{names[i]}' should be before '{names[i + 1]}'."
    )


@given(st.lists(st.text(alphabet="abcABC", min_size=1, max_size=3), max_size=8))
def test_insensitive_never_reports_case_only_differences(names):
    names.sort(key=str.lower)
    text = render([Item(name) for name in names])
    assert verify(text, ["asc", {"caseSensitive": False}]) == []


@given(st.lists(NAMES, max_size=8), st.integers(2, 10))
def test_containers_below_min_keys_are_exempt(names, min_keys):
    text = render([Item(name) for name in names])
    problems = verify(text, ["asc", {"minKeys": min_keys}])
    if len(names) < min_keys:
        assert problems == []


@pytest.mark.parametrize(
    "text, options, messages",
    [
        (
            'x = {"b": 1, "a": 2}\n',
            None,
            [
                "Expected object keys to be in ascending order. "
                "'a' should be before 'b'."
            ],
        ),
        (
            'x = {"a": 1, "b": 2}\n',
            ["desc"],
            [
                "Expected object keys to be in descending order. "
                "'b' should be before 'a'."
            ],
        ),
        (
            'x = {"a": 1, "B": 2, "c": 3}\n',
            DESC_INSENSITIVE,
            [
                "Expected object keys to be in insensitive descending order. "
                "'B' should be before 'a'.",
                "Expected object keys to be in insensitive descending order. "
                "'c' should be before 'B'.",
            ],
        ),
        (
            'x = {"item10": 1, "item2": 2}\n',
            ["asc", {"natural": True}],
            [
                "Expected object keys to be in natural ascending order. "
                "'item2' should be before 'item10'."
            ],
        ),
        (
            'x = {"Item2": 1, "item10": 2, "a": 3}\n',
            ["asc", {"natural": True, "caseSensitive": False}],
            [
                "Expected object keys to be in natural insensitive ascending order. "
                "'a' should be before 'item10'."
            ],
        ),
    ],
)
def test_messages(text, options, messages):
    assert [p.message for p in verify(text, options)] == messages


@pytest.mark.parametrize(
    "text",
    [
        'x = {"item10": 1, "item2": 2}\n',  # "1" sorts before "2"
        'x = {"B": 1, "b": 2}\n',  # uppercase sorts first
        'x = {"b": 1, **base, "a": 2}\n',
        "x = dict(b=1, **extra, a=2)\n",
        "x = dict(b=1, *rest, a=2)\n",
        "x = {f'{k}': 1, 'a': 2}\n",
        "x = {}\n",
        'x = {"a": 1}\n',
        "match x:\n    case {'b': 1, 'a': 2}:\n        pass\n",
        'print(f"{dict(a=1)}")\n',
        "x = f\"{ {**base, 'a': 1} }\"\n",
    ],
)
def test_no_problems(text):
    assert verify(text) == []


@pytest.mark.parametrize(
    "text, position",
    [
        ('x = {"b": 1, name: 2, "a": 3}\n', (1, 23)),
        ("x = dict(base, b=1, a=2)\n", (1, 21)),
        ('x = {1: "one", 2: "two", 10: "ten"}\n', (1, 26)),
        ('f({"b": 1, "a": 2})\n', (1, 12)),
        ('x = {\n    "b": {"d": 1, "c": 2},\n}\n', (2, 19)),
    ],
)
def test_reported_at_the_later_key(text, position):
    (problem,) = verify(text)
    assert (problem.line, problem.column) == position
    assert problem.rule_id == "sort-keys-fix"


def test_each_violation_is_reported():
    problems = verify('x = {"c": 1, "b": 2, "a": 3}\n')
    assert [(p.line, p.column) for p in problems] == [(1, 14), (1, 22)]


def test_spread_restarts_the_comparison():
    problems = verify('x = {"c": 1, **base, "b": 2, "a": 3}\n')
    assert len(problems) == 1
    assert problems[0].message.endswith("'a' should be before 'b'.")


def test_nested_containers_are_checked_separately():
    problems = verify('x = {"a": {"z": 1, "y": 2}, "b": 3}\n')
    assert len(problems) == 1
    assert problems[0].message.endswith("'y' should be before 'z'.")
