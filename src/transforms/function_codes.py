"""Positional function indicator decoding.

Position ``i`` (one-based) of an indicator such as ``1-3-----`` flags
function code ``str(i)``; the absent marker ``-`` leaves it unset and
any other character, whitespace included, sets it. Callers strip cells
before decoding.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from core.constants import FUNCTION_ABSENT_MARKER


def decode_function_indicator(indicator: str | None) -> tuple[str, ...]:
    """Decode an indicator into the function identifiers it flags.

    Args:
        indicator: Fixed-length positional indicator.

    Returns:
        Ordered identifiers present in the indicator, empty when none.
    """
    if not indicator:
        return ()
    return tuple(
        str(position)
        for position, marker in enumerate(indicator, 1)
        if marker != FUNCTION_ABSENT_MARKER
    )


def resolve_function_ids(
    identifiers: Iterable[str],
    function_ids: Mapping[str, int],
) -> tuple[int, ...]:
    """Map identifiers onto stored function code ids.

    Args:
        identifiers: Decoded function identifiers.
        function_ids: Function code to store id.

    Returns:
        Ordered unique ids; identifiers without a stored code are dropped.
    """
    resolved: list[int] = []
    for identifier in identifiers:
        function_id = function_ids.get(identifier)
        if function_id is None or function_id in resolved:
            continue
        resolved.append(function_id)
    return tuple(resolved)
