"""
unitum.core.utils
=================

Helpers for rendering compound units in a readable scientific
format (e.g. 'kg·m/s²', 'm^(1/2)').
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def _exponent_suffix(pow_: int, root: int) -> str:
    if root == 1:
        return _sup(pow_)
    return f"^({pow_}/{root})"


def format_unit_terms(terms: Iterable[Tuple[str, int, int]]) -> str:
    """
    Render ``(symbol, pow, root)`` terms as 'kg·m/s²'.

    Positive powers form the numerator in the given order, negative powers
    the denominator; '1' stands for an empty numerator.
    """
    num: List[str] = []
    den: List[str] = []
    for sym, p, r in terms:
        if p > 0:
            num.append(f"{sym}{_exponent_suffix(p, r)}")
        elif p < 0:
            den.append(f"{sym}{_exponent_suffix(-p, r)}")

    numerator = "·".join(num) if num else "1"
    if not den:
        return numerator
    denominator = "·".join(den)
    if len(den) > 1:
        denominator = f"({denominator})"
    return f"{numerator}/{denominator}"


__all__ = ["format_unit_terms"]
