"""
Lexical extraction of process invocations from workflow text.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List

from pydantic import BaseModel

LOGGER = logging.getLogger(__name__)

# Flat scan: the argument list stops at the first ")".
PROCESS_CALL_PATTERN = re.compile(r"(\w+)\s*\(([^)]*)\)", re.ASCII)


class CallInstance(BaseModel):
    process_name: str
    sequence_index: int
    raw_argument_text: str


def extract_calls(workflow_source: Any, known_names: Iterable[str]) -> List[CallInstance]:
    """
    Return one CallInstance per textual call of a known process, in source order.

    Unknown identifiers and unmatched constructs are skipped; non-text input
    yields an empty list.
    """
    if not isinstance(workflow_source, str):
        LOGGER.warning(
            "Workflow content is not a string (%s); nothing to extract.",
            type(workflow_source).__name__,
        )
        return []

    names = set(known_names)
    calls: List[CallInstance] = []
    for match in PROCESS_CALL_PATTERN.finditer(workflow_source):
        process_name = match.group(1)
        if process_name not in names:
            continue
        calls.append(
            CallInstance(
                process_name=process_name,
                sequence_index=len(calls),
                raw_argument_text=match.group(2),
            )
        )
    return calls
