"""Outbound-request safety gate for the Jira base URL.

The base URL comes from user configuration and every tracker call is made
against it, so it must never point the plugin at internal infrastructure.
`validate_base_url` applies these rules in order and stops at the first
violation:

1. the URL is non-empty
2. it contains no control characters (< 0x20 or 0x7F)
3. it parses (balanced IPv6 brackets, numeric port, no whitespace in host,
   no backslash in the authority)
4. the scheme is https; http is tolerated for localhost, 127.0.0.1 and ::1
5. the host is not `localhost`
6. the host is not a known cloud metadata endpoint, by name or by address
   (literal in any notation, or resolved)
7. neither the literal address nor any resolved address is private

Resolution is best effort. A host that does not resolve is accepted by this
check; the tracker client will fail on it later with a transport error.
"""

from __future__ import annotations

import ipaddress
import socket
from collections.abc import Callable, Sequence
from urllib.parse import urlsplit

from relgate.core.result import Err, Ok, Result
from relgate.jira.errors import SecurityError

__all__ = [
    "Resolver",
    "validate_base_url",
    "is_private_ip",
    "is_metadata_ip",
    "is_private_address",
    "resolve_host",
    "LOCAL_DEV_HOSTS",
    "METADATA_HOSTS",
]

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
Resolver = Callable[[str], Sequence[str]]

# Hosts for which plain http is accepted during local development.
LOCAL_DEV_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})

METADATA_HOSTS = frozenset(
    {
        "metadata.google.internal",
        "metadata.goog",
        "metadata",
        "instance-data",
        "instance-data.ec2.internal",
        "100.100.100.200",  # Alibaba Cloud
        "fd00:ec2::254",  # AWS IMDS over IPv6
    }
)

# IP-form metadata endpoints, matched however the address is written.
_METADATA_IPS: frozenset[IPAddress] = frozenset(
    {
        ipaddress.ip_address("100.100.100.200"),
        ipaddress.ip_address("fd00:ec2::254"),
    }
)

_PRIVATE_V4 = tuple(
    ipaddress.IPv4Network(net)
    for net in (
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "127.0.0.0/8",
        "169.254.0.0/16",
        "100.64.0.0/10",
        "192.0.0.0/24",
        "192.0.2.0/24",
        "198.51.100.0/24",
        "203.0.113.0/24",
        "240.0.0.0/4",
        "224.0.0.0/24",
    )
)

# Documentation space (2001:db8::/32) is deliberately absent.
_PRIVATE_V6 = tuple(
    ipaddress.IPv6Network(net)
    for net in (
        "::1/128",
        "fc00::/7",
        "fe80::/10",
        "ff02::/16",
    )
)


def _unmapped(ip: IPAddress) -> IPAddress:
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def is_private_ip(ip: IPAddress) -> bool:
    """Return True if `ip` falls in a private or reserved range.

    IPv4-mapped IPv6 addresses (::ffff:a.b.c.d) are judged by their IPv4 form.
    0.0.0.0, :: and 239.0.0.0/8 are not considered private.
    """
    ip = _unmapped(ip)
    if isinstance(ip, ipaddress.IPv4Address):
        return any(ip in net for net in _PRIVATE_V4)
    return any(ip in net for net in _PRIVATE_V6)


def is_metadata_ip(ip: IPAddress) -> bool:
    """Return True if `ip` is a cloud metadata endpoint, in any notation."""
    return _unmapped(ip) in _METADATA_IPS


def _parse_ip(text: str) -> IPAddress | None:
    # getaddrinfo reports scoped IPv6 addresses as "fe80::1%eth0".
    text = text.split("%", 1)[0]
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def is_private_address(text: str) -> bool:
    """String form of is_private_ip; unparseable input is not private."""
    ip = _parse_ip(text)
    return ip is not None and is_private_ip(ip)


def resolve_host(host: str) -> Sequence[str]:
    """Resolve `host` to its IP addresses via the system resolver."""
    infos = socket.getaddrinfo(host, None)
    return [str(info[4][0]) for info in infos]


def _try_resolve(host: str, resolver: Resolver) -> Sequence[str]:
    try:
        return resolver(host)
    except (OSError, UnicodeError, ValueError):
        return ()


def _has_control_chars(url: str) -> bool:
    return any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url)


def _invalid(detail: str) -> Err[SecurityError]:
    return Err(SecurityError(kind="invalid_url", message=f"invalid URL: {detail}"))


def _metadata(endpoint: str) -> Err[SecurityError]:
    return Err(
        SecurityError(
            kind="metadata",
            message=f"cloud metadata endpoint {endpoint!r} is not allowed",
        )
    )


def _private(message: str) -> Err[SecurityError]:
    return Err(SecurityError(kind="private_address", message=message))


def validate_base_url(url: str, *, resolver: Resolver = resolve_host) -> Result[None, SecurityError]:
    """Check that `url` is a safe target for outbound tracker requests."""
    if not url:
        return Err(SecurityError(kind="required", message="base URL is required"))

    if _has_control_chars(url):
        return _invalid("contains control characters")

    try:
        parts = urlsplit(url)
        # Accessing .port validates it; urlsplit alone does not.
        _ = parts.port
    except ValueError as e:
        return _invalid(str(e))

    # HTTP clients that follow WHATWG read "\" as "/", so "a\@b" would reach
    # host "a" while urlsplit reports "b".
    if "\\" in parts.netloc:
        return _invalid("authority contains a backslash")

    netloc_host = parts.netloc.rpartition("@")[2]
    if any(ch.isspace() for ch in netloc_host):
        return _invalid("host contains whitespace")

    host = (parts.hostname or "").rstrip(".")
    scheme = parts.scheme.lower()

    if scheme != "https" and not (scheme == "http" and host in LOCAL_DEV_HOSTS):
        shown = scheme or "<none>"
        return Err(
            SecurityError(
                kind="scheme",
                message=f"base URL must use HTTPS (https:// scheme), got scheme {shown!r}",
            )
        )

    if host == "localhost":
        return Err(
            SecurityError(
                kind="localhost",
                message="localhost is not allowed as base URL (loopback targets are private)",
            )
        )

    if host in METADATA_HOSTS:
        return _metadata(host)

    if not host:
        return Ok(None)

    literal = _parse_ip(host)
    if literal is not None:
        if is_metadata_ip(literal):
            return _metadata(host)
        if is_private_ip(literal):
            return _private(f"private IP address {literal} is not allowed")
        return Ok(None)

    for address in _try_resolve(host, resolver):
        ip = _parse_ip(address)
        if ip is None:
            continue
        if is_metadata_ip(ip):
            return _metadata(f"{host} ({address})")
        if is_private_ip(ip):
            return _private(f"host {host!r} resolves to private IP address {address}")

    return Ok(None)
