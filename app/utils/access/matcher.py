"""
Match desired accesses against the accesses listed by the bastion.

The bastion reports a wildcard port, user or proxy port as an absent field,
and a protocol-restricted access as the user '!<protocol>'.
"""
from typing import Iterable, Optional

from app.utils.access.access_models import (
    WILDCARD,
    AccessProtocol,
    AccessRecord,
    AccessScope,
    AccessSpecification,
    ProtocolPrincipal,
    ProxyHop,
    UserPrincipal,
)

PROTOCOL_USER_PREFIX = "!"


def _or_wildcard(value: Optional[str]) -> str:
    return WILDCARD if value is None else value


def matches(spec: AccessSpecification, record: AccessRecord) -> bool:
    """Check whether a listed access is the one described by spec."""
    # addresses are compared as-is, no normalization
    if spec.address != record.ip:
        return False

    if spec.port != _or_wildcard(record.port):
        return False

    if isinstance(spec.principal, ProtocolPrincipal):
        if record.user != PROTOCOL_USER_PREFIX + spec.principal.protocol.value:
            return False
    elif spec.principal.name != _or_wildcard(record.user):
        return False

    if (spec.remote_port is None) != (record.remote_port is None):
        return False
    if spec.remote_port is not None and spec.remote_port != record.remote_port:
        return False

    if (spec.proxy is None) != (record.proxy_ip is None):
        return False
    if spec.proxy is not None:
        if spec.proxy.address != record.proxy_ip:
            return False
        if spec.proxy.port != _or_wildcard(record.proxy_port):
            return False
        # the bastion does not default the proxy user, no wildcard here
        if spec.proxy.user != record.proxy_user:
            return False

    return True


def find_matching_record(
    spec: AccessSpecification, records: Iterable[AccessRecord]
) -> Optional[AccessRecord]:
    """Return the first listed access matching spec, or None if it is gone."""
    for record in records:
        if matches(spec, record):
            return record
    return None


def specification_from_record(scope: AccessScope, record: AccessRecord) -> AccessSpecification:
    """
    Describe a listed access as a specification.

    Absent port and user become the wildcard, '!<protocol>' users become a
    protocol principal, and an absent proxy port becomes the wildcard when
    the access goes through a proxy.

    Raises:
        ValueError: If the record cannot be expressed as a specification,
            e.g. an unknown protocol or a proxy without a proxy user.
    """
    user = _or_wildcard(record.user)
    if user.startswith(PROTOCOL_USER_PREFIX):
        principal = ProtocolPrincipal(protocol=AccessProtocol(user[len(PROTOCOL_USER_PREFIX):]))
    else:
        principal = UserPrincipal(name=user)

    proxy = None
    if record.proxy_ip is not None:
        if record.proxy_user is None:
            raise ValueError(f"Access to {record.ip} has a proxy without a proxy user")
        proxy = ProxyHop(
            address=record.proxy_ip,
            port=_or_wildcard(record.proxy_port),
            user=record.proxy_user,
        )

    return AccessSpecification(
        scope=scope,
        address=record.ip,
        port=_or_wildcard(record.port),
        principal=principal,
        remote_port=record.remote_port,
        proxy=proxy,
    )
