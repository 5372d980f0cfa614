#!filepath: tests/ingest/test_text_format.py
from __future__ import annotations

import pytest

from costsense.core.example import NOT_APPLICABLE
from costsense.core.features import hash_feature
from costsense.ingest.text_format import (
    parse_features,
    parse_label,
    parse_line,
    read_examples,
    read_file,
)
from costsense.utils.errors import ParseError


def test_parse_line_labels_costs_and_tag():
    ex = parse_line("1:0.5 2:1.0 3 'row42 |ns a b:0.5 |other c", index=0)

    assert [(c.label_id, c.cost) for c in ex.candidates] == [
        (1, 0.5),
        (2, 1.0),
        (3, NOT_APPLICABLE),
    ]
    assert ex.tag == "row42"
    assert ex.index == 0
    assert dict(ex.shared) == {
        hash_feature("a", "ns"): 1.0,
        hash_feature("b", "ns"): 0.5,
        hash_feature("c", "other"): 1.0,
    }


def test_default_namespace():
    f = parse_features("| x y:2")

    assert dict(f) == {hash_feature("x"): 1.0, hash_feature("y"): 2.0}


def test_repeated_feature_summed():
    f = parse_features("| x x:2")

    assert dict(f) == {hash_feature("x"): 3.0}


@pytest.mark.parametrize(
    "line, match",
    [
        ("1:0 2:1 a b", "missing '|'"),
        ("x:0 | a", "bad label id"),
        ("1:abc | a", "bad cost"),
        ("-1:0 | a", ">= 0"),
        ("1:0 | a:zz", "bad feature value"),
        ("1:0 | :1", "empty feature name"),
    ],
)
def test_parse_errors_carry_line_number(line, match):
    with pytest.raises(ParseError, match=match) as e:
        parse_line(line, line_no=17)

    assert e.value.line_no == 17
    assert "line 17" in str(e.value)


def test_nan_cost_parsed_for_validation():
    c = parse_label("4:nan")

    assert c.label_id == 4
    assert c.cost != c.cost


def test_read_examples_skips_blank_lines_and_indexes():
    lines = ["1:0 2:1 | a\n", "\n", "1:1 2:0 | b\n"]

    examples = list(read_examples(lines))

    assert [e.index for e in examples] == [0, 1]
    assert examples[1].cost_of(2) == 0.0


def test_read_ldf_blocks():
    lines = [
        "shared |s user\n",
        "1:0.0 |a item7\n",
        "2:1.5 'q1 |a item9\n",
        "\n",
        "\n",
        "1 |a item1\n",
        "2 |a item2\n",
    ]

    first, second = read_examples(lines, ldf=True)

    assert first.index == 0 and second.index == 1
    assert dict(first.shared) == {hash_feature("user", "s"): 1.0}
    assert [(c.label_id, c.cost) for c in first.candidates] == [(1, 0.0), (2, 1.5)]
    assert dict(first.candidates[0].features) == {hash_feature("item7", "a"): 1.0}
    assert first.tag == "q1"
    assert all(c.cost is NOT_APPLICABLE for c in second.candidates)


def test_ldf_line_with_two_labels_rejected():
    with pytest.raises(ParseError, match="exactly one label") as e:
        list(read_examples(["1:0 2:1 | a\n"], ldf=True))

    assert e.value.line_no == 1


def test_read_file(tmp_path):
    p = tmp_path / "train.txt"
    p.write_text("1:0 2:1 | a\n1:1 2:0 | b\n", encoding="utf-8")

    assert len(list(read_file(p))) == 2


def test_named_namespace_record_ingested():
    # "ns" hashes to a negative signed murmur seed
    (ex,) = read_examples(["1:0 2:1 |ns a\n"])

    assert dict(ex.shared) == {hash_feature("a", "ns"): 1.0}


def test_non_strict_yields_error_in_place():
    lines = ["1:0 2:1 | a\n", "x:0 | a\n", "1:1 2:0 | b\n"]

    first, bad, last = read_examples(lines, strict=False)

    assert isinstance(bad, ParseError)
    assert bad.example_index == 1
    assert bad.line_no == 2
    assert "bad label id" in str(bad)
    assert (first.index, last.index) == (0, 2)


def test_strict_error_carries_record_index():
    with pytest.raises(ParseError) as e:
        list(read_examples(["1:0 | a\n", "1:0 a\n"]))

    assert e.value.example_index == 1
    assert e.value.line_no == 2


def test_non_strict_ldf_bad_block_skipped():
    lines = ["1:0 2:1 | a\n", "\n", "1:0 | a\n", "2:1 | b\n"]

    bad, good = read_examples(lines, ldf=True, strict=False)

    assert isinstance(bad, ParseError)
    assert bad.example_index == 0
    assert good.index == 1
