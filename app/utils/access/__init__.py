"""Access identifier codec and bastion access matching."""
from app.utils.access.access_models import (
    WILDCARD,
    AccessProtocol,
    AccessRecord,
    AccessScope,
    AccessSpecification,
    ProtocolPrincipal,
    ProxyHop,
    ScopeKind,
    UserPrincipal,
)
from app.utils.access.address import unwrap, wrap
from app.utils.access.errors import (
    DecodeError,
    InvalidArityError,
    InvalidFieldError,
    InvalidNumberError,
)
from app.utils.access.identifier import decode, encode
from app.utils.access.matcher import find_matching_record, matches, specification_from_record
from app.utils.access.tokenizer import tokenize

__all__ = [
    "WILDCARD",
    "AccessProtocol",
    "AccessRecord",
    "AccessScope",
    "AccessSpecification",
    "ProtocolPrincipal",
    "ProxyHop",
    "ScopeKind",
    "UserPrincipal",
    "wrap",
    "unwrap",
    "tokenize",
    "encode",
    "decode",
    "matches",
    "find_matching_record",
    "specification_from_record",
    "DecodeError",
    "InvalidArityError",
    "InvalidFieldError",
    "InvalidNumberError",
]
