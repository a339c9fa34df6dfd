"""
Tokenizer for canonical access identifiers.

Fields are separated by ':'. Colons inside a bracketed span (an IPv6
literal such as [2001:db8::1]) belong to the field and do not split it.
"""
import enum
from typing import List

from app.utils.access.address import unwrap

DELIMITER = ":"


class _State(enum.Enum):
    PLAIN = "plain"
    IN_BRACKETS = "in_brackets"


def tokenize(identifier: str) -> List[str]:
    """
    Split an identifier into its fields.

    Empty fields are kept (a protocol access has an empty user field) and the
    last field is always emitted. Brackets are markers only: unbalanced
    brackets are not an error.

    Args:
        identifier: Canonical identifier, e.g. "g:[2001:db8::1]:22:root"

    Returns:
        List of fields with enclosing brackets removed,
        e.g. ["g", "2001:db8::1", "22", "root"]
    """
    fields = []
    current = []
    state = _State.PLAIN

    for char in identifier:
        if char == "[":
            state = _State.IN_BRACKETS
        elif char == "]":
            state = _State.PLAIN

        if char == DELIMITER and state is _State.PLAIN:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))

    return [unwrap(field) for field in fields]
