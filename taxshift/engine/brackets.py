from __future__ import annotations
from bisect import bisect_left
from numbers import Real
from typing import Dict, Iterable, Iterator, Optional, Tuple, Any

from .errors import ConfigError

Bracket = Tuple[int, float]


def _check_pair(idx: int, threshold: Any, ratio: Any) -> Bracket:
    # bool is an int subclass
    if threshold is None or isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ConfigError(f"Bracket {idx}: threshold must be an integer, got {threshold!r}")
    if ratio is None or isinstance(ratio, bool) or not isinstance(ratio, Real):
        raise ConfigError(f"Bracket {idx}: ratio must be a number, got {ratio!r}")
    return threshold, float(ratio)


class BracketTable:
    """
    Ordered mapping threshold -> marginal ratio.

    Iteration always yields (threshold, ratio) in ascending threshold order,
    regardless of the order the pairs were supplied in. A repeated threshold
    overwrites the earlier ratio. The largest threshold is the top bracket.
    """

    __slots__ = ("_thresholds", "_ratios")

    def __init__(self, pairs: Iterable[Tuple[Any, Any]]):
        table: Dict[int, float] = {}
        for idx, pair in enumerate(pairs):
            try:
                threshold, ratio = pair
            except (TypeError, ValueError):
                raise ConfigError(f"Bracket {idx}: expected a (threshold, ratio) pair, got {pair!r}") from None
            threshold, ratio = _check_pair(idx, threshold, ratio)
            table[threshold] = ratio
        if not table:
            raise ConfigError("Bracket table must contain at least one bracket")
        keys = sorted(table)
        self._thresholds: Tuple[int, ...] = tuple(keys)
        self._ratios: Tuple[float, ...] = tuple(table[k] for k in keys)

    def __iter__(self) -> Iterator[Bracket]:
        return zip(self._thresholds, self._ratios)

    def __len__(self) -> int:
        return len(self._thresholds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BracketTable):
            return NotImplemented
        return self._thresholds == other._thresholds and self._ratios == other._ratios

    def __hash__(self) -> int:
        return hash((self._thresholds, self._ratios))

    def __repr__(self) -> str:
        inner = ", ".join(f"{t}: {r}" for t, r in self)
        return f"BracketTable({{{inner}}})"

    @property
    def thresholds(self) -> Tuple[int, ...]:
        return self._thresholds

    @property
    def top(self) -> Bracket:
        return self._thresholds[-1], self._ratios[-1]

    def successor(self, target: float) -> Optional[Bracket]:
        """Smallest bracket whose threshold is >= target, or None if target exceeds every threshold."""
        i = bisect_left(self._thresholds, target)
        if i == len(self._thresholds):
            return None
        return self._thresholds[i], self._ratios[i]

    def bracket_info(self, amount: float) -> Dict[str, Any]:
        """
        Lightweight inspector mirroring successor().
        Returns {'lower': int, 'upper': int, 'ratio': float} for the bracket
        covering amount, where lower is the previous threshold (0 for the first).
        Amounts above the top threshold report the top bracket with 'above_top': True.
        """
        i = bisect_left(self._thresholds, amount)
        above_top = i == len(self._thresholds)
        if above_top:
            i -= 1
        lower = self._thresholds[i - 1] if i > 0 else 0
        return {
            "lower": lower,
            "upper": self._thresholds[i],
            "ratio": self._ratios[i],
            "above_top": above_top,
        }

    def to_rules(self) -> list[dict]:
        return [{"bound": t, "ratio": r} for t, r in self]
