"""
Pydantic models for bastion access rules.

AccessSpecification is the desired state of one rule; AccessRecord is the
shape the bastion returns when listing existing rules.
"""
import enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator

WILDCARD = "*"


class AccessProtocol(str, enum.Enum):
    """Protocols an access can be restricted to instead of a login user."""
    SFTP = "sftp"
    SCPUPLOAD = "scpupload"
    SCPDOWNLOAD = "scpdownload"
    RSYNC = "rsync"
    PORTFORWARD = "portforward"


class ScopeKind(str, enum.Enum):
    """Owning collection of an access."""
    GROUP = "group"  # group server access: group
    GUEST = "guest"  # group guest access: group + account

    @property
    def token_count(self) -> int:
        return 2 if self is ScopeKind.GUEST else 1


def _port_string(value):
    """Accept ports as int or str, keep them as str."""
    # bool is an int subclass; pass it through so str validation rejects it
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


def is_port_token(value: str) -> bool:
    """True for the wildcard token or a plain decimal port."""
    return value == WILDCARD or (value.isascii() and value.isdigit())


def _check_port_token(value: str) -> str:
    if not is_port_token(value):
        raise ValueError(f"port must be a number or '{WILDCARD}', got '{value}'")
    return value


def _check_user_token(value: str) -> str:
    if "[" in value or "]" in value:
        raise ValueError(f"user must not contain square brackets, got '{value}'")
    return value


# Login name inside an identifier; brackets there mark IPv6 addresses
UserToken = Annotated[str, Field(min_length=1), AfterValidator(_check_user_token)]

# Port of a desired access: decimal digits or "*"
PortToken = Annotated[str, BeforeValidator(_port_string), AfterValidator(_check_port_token)]

# Port as listed by the bastion, which sends either an int or a string
RecordPort = Annotated[Optional[str], BeforeValidator(_port_string)]


class AccessScope(BaseModel):
    """Group (and, for guest accesses, account) owning the access."""
    model_config = ConfigDict(frozen=True)

    group: str = Field(min_length=1)
    account: Optional[str] = Field(default=None, min_length=1)

    @property
    def kind(self) -> ScopeKind:
        return ScopeKind.GUEST if self.account is not None else ScopeKind.GROUP

    def tokens(self) -> List[str]:
        if self.account is None:
            return [self.group]
        return [self.group, self.account]


class UserPrincipal(BaseModel):
    """Interactive login user, or the wildcard token."""
    model_config = ConfigDict(frozen=True)

    type: Literal["user"] = "user"
    name: UserToken


class ProtocolPrincipal(BaseModel):
    """Protocol-restricted access (sftp, rsync, port forwarding, ...)."""
    model_config = ConfigDict(frozen=True)

    type: Literal["protocol"] = "protocol"
    protocol: AccessProtocol


Principal = Annotated[Union[UserPrincipal, ProtocolPrincipal], Field(discriminator="type")]


class ProxyHop(BaseModel):
    """Proxy jump host; all three fields are always set."""
    model_config = ConfigDict(frozen=True)

    address: str = Field(min_length=1)
    port: PortToken
    user: UserToken


class AccessSpecification(BaseModel):
    """Desired state of one bastion access rule."""
    model_config = ConfigDict(frozen=True)

    scope: AccessScope
    address: str = Field(min_length=1)
    port: PortToken
    principal: Principal
    remote_port: Optional[int] = Field(default=None, ge=1, le=65535)
    proxy: Optional[ProxyHop] = None

    @model_validator(mode="after")
    def check_remote_port(self):
        if self.remote_port is not None and not self.is_port_forward:
            raise ValueError("remote_port can only be set for the 'portforward' protocol")
        return self

    @property
    def protocol(self) -> Optional[AccessProtocol]:
        if isinstance(self.principal, ProtocolPrincipal):
            return self.principal.protocol
        return None

    @property
    def user(self) -> Optional[str]:
        if isinstance(self.principal, UserPrincipal):
            return self.principal.name
        return None

    @property
    def is_port_forward(self) -> bool:
        return self.protocol is AccessProtocol.PORTFORWARD

    @classmethod
    def build(
        cls,
        scope: AccessScope,
        address: str,
        port: Union[str, int],
        user: Optional[str] = None,
        protocol: Optional[Union[str, AccessProtocol]] = None,
        remote_port: Optional[int] = None,
        proxy_ip: Optional[str] = None,
        proxy_port: Optional[Union[str, int]] = None,
        proxy_user: Optional[str] = None,
    ) -> "AccessSpecification":
        """
        Build a specification from flat, optional configuration fields.

        Raises:
            ValueError: If both or neither of user/protocol are set, or if
                the proxy fields are only partially set.
        """
        if (user is None) == (protocol is None):
            raise ValueError("Either 'user' or 'protocol' must be set, but not both.")

        proxy_fields = (proxy_ip, proxy_port, proxy_user)
        if any(f is not None for f in proxy_fields) and not all(f is not None for f in proxy_fields):
            raise ValueError("'proxy_ip', 'proxy_port' and 'proxy_user' must be set together.")

        if user is not None:
            principal = UserPrincipal(name=user)
        else:
            principal = ProtocolPrincipal(protocol=protocol)

        proxy = None
        if proxy_ip is not None:
            proxy = ProxyHop(address=proxy_ip, port=proxy_port, user=proxy_user)

        return cls(
            scope=scope,
            address=address,
            port=port,
            principal=principal,
            remote_port=remote_port,
            proxy=proxy,
        )


class AccessRecord(BaseModel):
    """Access as listed by the bastion (groupListServers, groupListGuestAccesses)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    ip: str
    port: RecordPort = None
    user: Optional[str] = None
    proxy_ip: Optional[str] = Field(default=None, alias="proxyIp")
    proxy_port: RecordPort = Field(default=None, alias="proxyPort")
    proxy_user: Optional[str] = Field(default=None, alias="proxyUser")
    remote_port: Optional[int] = Field(default=None, alias="remotePort")
    local_port: Optional[int] = Field(default=None, alias="localPort")
    comment: Optional[str] = None
    user_comment: Optional[str] = Field(default=None, alias="userComment")
    force_password: Optional[str] = Field(default=None, alias="forcePassword")
    force_key: Optional[str] = Field(default=None, alias="forceKey")
    protocol: Optional[str] = None
    reverse_dns: Optional[str] = Field(default=None, alias="reverseDns")
    added_by: Optional[str] = Field(default=None, alias="addedBy")
    added_date: Optional[str] = Field(default=None, alias="addedDate")
    expiry: Optional[int] = None
