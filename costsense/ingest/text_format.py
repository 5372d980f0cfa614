# costsense/ingest/text_format.py
"""
Text ingestion for cost-sensitive examples.

Single-line records (one example per line)::

    1:0.5 2:1.0 3 'tag |ns a b:0.5 |other c

  - label tokens ``id[:cost]`` precede the first ``|``;
    an id without cost is NOT_APPLICABLE
  - a token starting with ``'`` is the example tag
  - features ``name[:value]``, value defaults to 1.0,
    hashed inside their namespace

Label-dependent records (one candidate per line, blank line ends the example)::

    shared |s user=42
    1:0.0 |a item=7
    2:1.5 |a item=9
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from costsense.core.example import NOT_APPLICABLE, Candidate, CostSensitiveExample
from costsense.core.features import DEFAULT_NAMESPACE, SparseFeatures, hash_feature
from costsense.utils.errors import ParseError

SHARED = "shared"


def parse_features(text: str, line_no: Optional[int] = None) -> SparseFeatures:
    """``text`` is everything from the first ``|`` on."""
    pairs: List[Tuple[int, float]] = []

    for segment in text.split("|")[1:]:
        if not segment.strip():
            continue

        tokens = segment.split()
        if segment[0].isspace():
            namespace = DEFAULT_NAMESPACE
        else:
            namespace, tokens = tokens[0], tokens[1:]

        for tok in tokens:
            name, value = tok, 1.0
            if ":" in tok:
                name, raw = tok.rsplit(":", 1)
                try:
                    value = float(raw)
                except ValueError:
                    raise ParseError(f"bad feature value {tok!r}", line_no=line_no) from None
            if not name:
                raise ParseError(f"empty feature name in {tok!r}", line_no=line_no)
            pairs.append((hash_feature(name, namespace), value))

    return SparseFeatures.from_pairs(pairs)


def parse_label(tok: str, line_no: Optional[int] = None) -> Candidate:
    raw_id, sep, raw_cost = tok.partition(":")
    try:
        label_id = int(raw_id)
    except ValueError:
        raise ParseError(f"bad label id {tok!r}", line_no=line_no) from None
    if label_id < 0:
        raise ParseError(f"label id must be >= 0: {tok!r}", line_no=line_no)

    if not sep:
        return Candidate(label_id, NOT_APPLICABLE)
    try:
        cost = float(raw_cost)
    except ValueError:
        raise ParseError(f"bad cost {tok!r}", line_no=line_no) from None
    return Candidate(label_id, cost)


def _split_head(line: str, line_no: int) -> Tuple[List[str], Optional[str], str]:
    bar = line.find("|")
    if bar < 0:
        raise ParseError("missing '|' feature section", line_no=line_no)

    labels: List[str] = []
    tag = None
    for tok in line[:bar].split():
        if tok.startswith("'"):
            tag = tok[1:]
        else:
            labels.append(tok)
    return labels, tag, line[bar:]


def parse_line(line: str, *, index: Optional[int] = None, line_no: int = 1) -> CostSensitiveExample:
    labels, tag, feats = _split_head(line, line_no)
    return CostSensitiveExample(
        candidates=tuple(parse_label(tok, line_no) for tok in labels),
        shared=parse_features(feats, line_no),
        index=index,
        tag=tag,
    )


def parse_ldf_block(
    lines: List[Tuple[int, str]], *, index: Optional[int] = None
) -> CostSensitiveExample:
    shared = SparseFeatures.empty()
    candidates: List[Candidate] = []
    tag = None

    for line_no, line in lines:
        labels, line_tag, feats = _split_head(line, line_no)
        tag = line_tag or tag
        features = parse_features(feats, line_no)

        if labels == [SHARED]:
            shared = shared + features
            continue
        if len(labels) != 1:
            raise ParseError(
                f"expected exactly one label per candidate line, got {labels}",
                line_no=line_no,
            )
        label = parse_label(labels[0], line_no)
        candidates.append(Candidate(label.label_id, label.cost, features))

    return CostSensitiveExample(tuple(candidates), shared, index=index, tag=tag)


Record = Union[CostSensitiveExample, ParseError]


def _record(parse: Callable[[], CostSensitiveExample], index: int, strict: bool) -> Record:
    try:
        return parse()
    except ParseError as err:
        if strict:
            raise err.at(index) from None
        return err.at(index)


def read_examples(
    lines: Iterable[str], *, ldf: bool = False, strict: bool = True
) -> Iterator[Record]:
    """
    Yield examples in input order; ``index`` is the 0-based record number.

    With ``strict=False`` a record that fails to parse yields its ParseError
    in place of the example and reading goes on with the next record.
    """
    index = 0

    if not ldf:
        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            text = line.rstrip("\n")
            yield _record(
                lambda: parse_line(text, index=index, line_no=line_no), index, strict
            )
            index += 1
        return

    block: List[Tuple[int, str]] = []
    for line_no, line in enumerate(lines, start=1):
        if line.strip():
            block.append((line_no, line.rstrip("\n")))
            continue
        if block:
            yield _record(lambda: parse_ldf_block(block, index=index), index, strict)
            index += 1
            block = []

    if block:
        yield _record(lambda: parse_ldf_block(block, index=index), index, strict)


def read_file(
    path: str | Path, *, ldf: bool = False, strict: bool = True
) -> Iterator[Record]:
    with open(path, "r", encoding="utf-8") as f:
        yield from read_examples(f, ldf=ldf, strict=strict)
