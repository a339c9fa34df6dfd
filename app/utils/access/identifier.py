"""
Canonical access identifiers.

An identifier references one bastion access from outside (e.g. on import):

    <scope>:<ip>:<port>:<user>
    <scope>:<ip>:<port>::<protocol>
    <scope>:<ip>:<port>::portforward:<remote_port>

each optionally followed by ':<proxy_ip>:<proxy_port>:<proxy_user>'. The
scope is 'group' for server accesses or 'group:account' for guest accesses.
IPv6 addresses are wrapped in brackets.

encode() and decode() are a matched pair: the field layout of one must
always be mirrored by the other.
"""
import logging
from typing import List

from pydantic import ValidationError

from app.utils.access.access_models import (
    AccessProtocol,
    AccessScope,
    AccessSpecification,
    ProtocolPrincipal,
    ProxyHop,
    ScopeKind,
    UserPrincipal,
    is_port_token,
)
from app.utils.access.address import wrap
from app.utils.access.errors import (
    InvalidArityError,
    InvalidFieldError,
    InvalidNumberError,
)
from app.utils.access.tokenizer import DELIMITER, tokenize

logger = logging.getLogger(__name__)


def encode(spec: AccessSpecification) -> str:
    """Render the canonical identifier of an access."""
    fields = list(spec.scope.tokens())
    fields.append(wrap(spec.address))
    fields.append(spec.port)

    if isinstance(spec.principal, UserPrincipal):
        fields.append(spec.principal.name)
    else:
        # user is left empty when a protocol is set
        fields.append("")
        fields.append(spec.principal.protocol.value)
        if spec.remote_port is not None:
            fields.append(str(spec.remote_port))

    if spec.proxy is not None:
        fields.append(wrap(spec.proxy.address))
        fields.append(spec.proxy.port)
        fields.append(spec.proxy.user)

    return DELIMITER.join(fields)


def decode(identifier: str, scope_kind: ScopeKind = ScopeKind.GROUP) -> AccessSpecification:
    """
    Parse a canonical identifier back into an access specification.

    Args:
        identifier: Identifier as produced by encode()
        scope_kind: Whether the identifier starts with 'group' or 'group:account'

    Returns:
        The decoded AccessSpecification

    Raises:
        InvalidArityError: Field count or layout matches no known form
        InvalidNumberError: A port or remote port is not a number
        InvalidFieldError: A field holds a value no access can have
    """
    scope_kind = ScopeKind(scope_kind)
    tokens = tokenize(identifier)
    prefix = scope_kind.token_count + 2

    if len(tokens) <= prefix:
        raise InvalidArityError(identifier, len(tokens))

    scope_tokens = tokens[:scope_kind.token_count]
    address, port = tokens[scope_kind.token_count:prefix]
    rest = tokens[prefix:]

    _check_port(identifier, "port", port)

    user = None
    protocol = None
    remote_port = None
    proxy_tokens: List[str] = []

    if len(rest) in (1, 4):
        # user[:proxy_ip:proxy_port:proxy_user]
        user = rest[0]
        if user == "":
            if len(rest) == 1:
                raise InvalidFieldError(identifier, "user", "user must not be empty")
            raise InvalidArityError(identifier, len(tokens))
        proxy_tokens = rest[1:]
    elif len(rest) in (2, 3, 5, 6):
        # :protocol[:remote_port][:proxy_ip:proxy_port:proxy_user]
        if rest[0] != "":
            raise InvalidArityError(identifier, len(tokens))
        protocol = _parse_protocol(identifier, rest[1])
        has_remote_port = len(rest) in (3, 6)
        if has_remote_port:
            if protocol is not AccessProtocol.PORTFORWARD:
                raise InvalidFieldError(
                    identifier,
                    "remote_port",
                    f"remote port requires protocol '{AccessProtocol.PORTFORWARD.value}', got '{protocol.value}'",
                )
            remote_port = _parse_int(identifier, "remote_port", rest[2])
            proxy_tokens = rest[3:]
        else:
            proxy_tokens = rest[2:]
    else:
        raise InvalidArityError(identifier, len(tokens))

    if proxy_tokens:
        _check_port(identifier, "proxy_port", proxy_tokens[1])

    try:
        proxy = None
        if proxy_tokens:
            proxy_ip, proxy_port, proxy_user = proxy_tokens
            proxy = ProxyHop(address=proxy_ip, port=proxy_port, user=proxy_user)

        if user is not None:
            principal = UserPrincipal(name=user)
        else:
            principal = ProtocolPrincipal(protocol=protocol)

        spec = AccessSpecification(
            scope=AccessScope(
                group=scope_tokens[0],
                account=scope_tokens[1] if len(scope_tokens) > 1 else None,
            ),
            address=address,
            port=port,
            principal=principal,
            remote_port=remote_port,
            proxy=proxy,
        )
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "identifier"
        raise InvalidFieldError(identifier, field, error["msg"]) from e

    logger.debug(f"Decoded access identifier '{identifier}' ({scope_kind.value} scope)")
    return spec


def _check_port(identifier: str, field: str, value: str) -> None:
    if not is_port_token(value):
        raise InvalidNumberError(identifier, field, value)


def _parse_int(identifier: str, field: str, value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise InvalidNumberError(identifier, field, value)
    return int(value)


def _parse_protocol(identifier: str, value: str) -> AccessProtocol:
    try:
        return AccessProtocol(value)
    except ValueError:
        allowed = ", ".join(p.value for p in AccessProtocol)
        raise InvalidFieldError(
            identifier, "protocol", f"unknown protocol '{value}' (expected one of: {allowed})"
        ) from None
