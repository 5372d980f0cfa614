# costsense/core/features.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Tuple

import numpy as np
from sklearn.utils import murmurhash3_32

# index of the bias feature; above the 32-bit range hash_feature produces
CONSTANT = 1 << 40

DEFAULT_NAMESPACE = " "

_U64 = 0xFFFFFFFFFFFFFFFF
_GOLDEN = 0x9E3779B97F4A7C15
_MIX_B = np.uint64(0xBF58476D1CE4E5B9)
_MIX_C = np.uint64(0x94D049BB133111EB)


def _mix(indices: np.ndarray, seed: int) -> np.ndarray:
    """splitmix64 finalizer over ``indices ^ f(seed)``; bijective for a fixed seed."""
    salt = np.uint64(((seed + 1) * _GOLDEN) & _U64)
    with np.errstate(over="ignore"):
        h = indices ^ salt
        h = (h ^ (h >> np.uint64(30))) * _MIX_B
        h = (h ^ (h >> np.uint64(27))) * _MIX_C
        h = h ^ (h >> np.uint64(31))
    return h


def hash_feature(name: str, namespace: str = DEFAULT_NAMESPACE) -> int:
    """Stable 32-bit index of ``name`` inside ``namespace``."""
    ns_seed = murmurhash3_32(namespace, seed=0, positive=True)
    return int(murmurhash3_32(name, seed=ns_seed, positive=True))


@dataclass(frozen=True, eq=False)
class SparseFeatures:
    """
    SparseFeatures（FINAL / FROZEN）

    Immutable sparse vector.

    Invariants:
      - indices sorted ascending, unique (uint64)
      - duplicate indices are summed on construction
      - exact zeros are dropped
    """

    indices: np.ndarray
    values: np.ndarray

    def __post_init__(self):
        idx = np.array(self.indices, dtype=np.uint64).ravel()
        val = np.array(self.values, dtype=np.float64).ravel()

        if idx.shape != val.shape:
            raise ValueError(
                f"indices/values length mismatch: {idx.size} != {val.size}"
            )

        if idx.size:
            uniq, inverse = np.unique(idx, return_inverse=True)
            summed = np.zeros(uniq.size, dtype=np.float64)
            np.add.at(summed, inverse, val)
            keep = summed != 0.0
            idx, val = uniq[keep], summed[keep]

        idx.setflags(write=False)
        val.setflags(write=False)
        object.__setattr__(self, "indices", idx)
        object.__setattr__(self, "values", val)

    # --------------------------------------------------
    # constructors
    # --------------------------------------------------
    @classmethod
    def empty(cls) -> "SparseFeatures":
        return cls(np.empty(0, dtype=np.uint64), np.empty(0, dtype=np.float64))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, float]]) -> "SparseFeatures":
        pairs = list(pairs)
        if not pairs:
            return cls.empty()
        idx, val = zip(*pairs)
        return cls(np.array(idx, dtype=np.uint64), np.array(val, dtype=np.float64))

    @classmethod
    def from_dict(cls, mapping: Mapping[int, float]) -> "SparseFeatures":
        return cls.from_pairs(mapping.items())

    # --------------------------------------------------
    # transforms
    # --------------------------------------------------
    def tag(self, label_id: int) -> "SparseFeatures":
        """Move every feature into the private index space of ``label_id``."""
        return SparseFeatures(_mix(self.indices, int(label_id)), self.values)

    def with_constant(self, label_id: Optional[int] = None) -> "SparseFeatures":
        const = np.array([CONSTANT], dtype=np.uint64)
        if label_id is not None:
            const = _mix(const, int(label_id))
        return SparseFeatures(
            np.concatenate([self.indices, const]),
            np.concatenate([self.values, [1.0]]),
        )

    def subtract(self, other: "SparseFeatures") -> "SparseFeatures":
        return SparseFeatures(
            np.concatenate([self.indices, other.indices]),
            np.concatenate([self.values, -other.values]),
        )

    def __neg__(self) -> "SparseFeatures":
        return SparseFeatures(self.indices, -self.values)

    def __add__(self, other: "SparseFeatures") -> "SparseFeatures":
        return SparseFeatures(
            np.concatenate([self.indices, other.indices]),
            np.concatenate([self.values, other.values]),
        )

    # --------------------------------------------------
    # inspection
    # --------------------------------------------------
    def squared_norm(self) -> float:
        return float(np.dot(self.values, self.values))

    def __len__(self) -> int:
        return int(self.indices.size)

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        for i, v in zip(self.indices.tolist(), self.values.tolist()):
            yield int(i), float(v)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseFeatures):
            return NotImplemented
        return np.array_equal(self.indices, other.indices) and np.array_equal(
            self.values, other.values
        )

    def __hash__(self) -> int:
        return hash((self.indices.tobytes(), self.values.tobytes()))

    def __repr__(self) -> str:
        return f"SparseFeatures({dict(self)})"
