import copy

import pytest

from worker.app.services.sampler import max_array_length, sample_value

DOCS = [
    None,
    True,
    0,
    3.5,
    "text",
    [],
    {},
    list(range(10)),
    {"items": list(range(7)), "name": "x", "flag": False, "none": None},
    {"a": {"b": [1, 2, 3, 4]}},
    [[1, 2, 3, 4], [5, 6], [[7, 8, 9], [10]]],
    [{"rows": [{"v": list(range(6))}] * 4}, {"rows": []}, "tail", 9],
    {"deep": [[[[list(range(12))]]]]},
]


def _assert_shape(orig, out, n, apply_limit):
    assert type(orig) is type(out)
    if isinstance(orig, list):
        if apply_limit and len(orig) > n:
            assert len(out) == n
        else:
            assert len(out) == len(orig)
        for a, b in zip(orig, out):
            _assert_shape(a, b, n, apply_limit)
    elif isinstance(orig, dict):
        assert list(orig.keys()) == list(out.keys())
        for k in orig:
            _assert_shape(orig[k], out[k], n, apply_limit)
    else:
        assert orig == out


def _all_arrays(value):
    if isinstance(value, list):
        yield value
        for v in value:
            yield from _all_arrays(v)
    elif isinstance(value, dict):
        for v in value.values():
            yield from _all_arrays(v)


@pytest.mark.parametrize("n", [1, 2, 3, 5])
@pytest.mark.parametrize("doc", DOCS)
def test_every_array_capped_and_shape_kept(doc, n):
    out = sample_value(doc, n)
    assert all(len(a) <= n for a in _all_arrays(out))
    _assert_shape(doc, out, n, True)


@pytest.mark.parametrize("n", [1, 2, 3])
@pytest.mark.parametrize("doc", DOCS)
def test_sampling_is_idempotent(doc, n):
    once = sample_value(doc, n)
    assert sample_value(once, n) == once


@pytest.mark.parametrize("doc", DOCS)
def test_no_limit_keeps_document_identical(doc):
    assert sample_value(doc, 1, apply_limit=False) == doc


def test_short_arrays_unchanged():
    doc = {"a": [1, 2], "b": [[1], [2, 3]]}
    assert sample_value(doc, 2) == doc


def test_keeps_leading_elements_in_order():
    assert sample_value(["a", "b", "c", "d"], 2) == ["a", "b"]


def test_nested_array_truncated():
    assert sample_value({"a": {"b": [1, 2, 3, 4]}}, 2) == {"a": {"b": [1, 2]}}


def test_elements_of_kept_items_are_sampled():
    doc = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert sample_value(doc, 2) == [[1, 2], [4, 5]]


def test_input_not_mutated():
    doc = {"items": list(range(10)), "nested": [{"x": list(range(5))}]}
    before = copy.deepcopy(doc)
    out = sample_value(doc, 2)
    assert doc == before
    assert out is not doc
    assert out["items"] is not doc["items"]


def test_key_order_preserved():
    doc = {"z": 1, "a": [1, 2, 3], "m": {"y": 0, "b": 1}}
    out = sample_value(doc, 1)
    assert list(out) == ["z", "a", "m"]
    assert list(out["m"]) == ["y", "b"]


def test_max_length_must_be_positive():
    with pytest.raises(ValueError):
        sample_value([1, 2], 0)


def test_max_array_length():
    assert max_array_length(5) == 0
    assert max_array_length({}) == 0
    assert max_array_length([]) == 0
    assert max_array_length({"a": [1, [1, 2, 3, 4]], "b": [0] * 3}) == 4
