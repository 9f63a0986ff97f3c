from __future__ import annotations

import re

from .document import Node
from .errors import SynthesisError


# Before a fence, blockquote markers count as indentation too.
_LEADING_PREFIX_RE = re.compile(r"[>\s]*")


def base_indent(text: str, node: Node) -> int:
    """Return how many leading characters every line of the fragment carries.

    The prefix is the text between the start of the opening fence's line and
    the fence itself, limited to whitespace and ``>`` markers.
    """
    start = node.position.start
    if start.column == 1:
        return 0
    if start.offset is None:
        raise SynthesisError(
            span=node.position,
            message="fragment start has no offset",
            hint="parse the document with parse_document() so positions carry offsets",
        )

    leading = text[start.offset - start.column + 1 : start.offset]
    m = _LEADING_PREFIX_RE.match(leading)
    return len(m.group(0)) if m else 0
