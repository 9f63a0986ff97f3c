from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from typing import Any

from .config import UNSATISFIABLE_RULES
from .position_map import PositionMap
from .spans import Position


logger = logging.getLogger(__name__)

Message = dict[str, Any]


def translate_messages(
    messages: Iterable[Mapping[str, Any]],
    position_map: PositionMap,
    unsatisfiable: Collection[str] = UNSATISFIABLE_RULES,
) -> list[Message]:
    """Map one fragment's messages back onto the original document.

    Columns are 0-based on input and output. Fixes are only kept when the
    message stays on a single original line; input messages are not mutated.
    """
    skipped = UNSATISFIABLE_RULES | frozenset(unsatisfiable)
    out: list[Message] = []
    for message in messages:
        if not message or message.get("ruleId") in skipped:
            continue
        out.append(_translate_one(message, position_map))
    return out


def _lookup(position_map: PositionMap, line: int, column: int) -> Position | None:
    return position_map.map_position(Position(line=line, column=column + 1))


def _translate_one(message: Mapping[str, Any], position_map: PositionMap) -> Message:
    out = dict(message)
    can_fix = True

    start = _lookup(position_map, message["line"], message["column"])
    if start is None:
        logger.debug(
            "%s: %s:%s is unmapped, reporting at the fragment start",
            position_map.source,
            message["line"],
            message["column"],
        )
        start = position_map.origin or Position(line=1, column=1)
        can_fix = False
    out["line"] = start.line
    out["column"] = start.column - 1

    if message.get("endLine") is not None:
        end_column = message.get("endColumn")
        if end_column is None:
            end_column = message["column"]
        end = _lookup(position_map, message["endLine"], end_column)
        if end is None:
            end = start
            can_fix = False
        out["endLine"] = end.line
        out["endColumn"] = end.column - 1
        # A cross-line edit in generated coordinates may not be contiguous in the original.
        can_fix = can_fix and start.line == end.line

    if not can_fix:
        out.pop("fix", None)
        if out.get("suggestions") is not None:
            out["suggestions"] = [
                {k: v for k, v in suggestion.items() if k != "fix"} for suggestion in out["suggestions"]
            ]
    return out
