"""
Bracket handling for addresses embedded in colon-delimited identifiers.
"""


def wrap(address: str) -> str:
    """Wrap an IPv6 literal (anything containing ':') in square brackets."""
    if address.startswith("[") and address.endswith("]"):
        return address
    if ":" in address:
        return f"[{address}]"
    return address


def unwrap(token: str) -> str:
    """Strip exactly one pair of enclosing square brackets, if present."""
    if len(token) >= 2 and token.startswith("[") and token.endswith("]"):
        return token[1:-1]
    return token
