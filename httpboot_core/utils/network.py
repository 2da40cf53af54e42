"""
IPv4 address and CIDR arithmetic for boot network validation.

Addresses are handled as canonical dotted-quad strings and converted to
unsigned 32-bit integers for all subnet and range comparisons. Only IPv4 is
supported, and CIDR blocks must carry an explicit prefix length.
"""

import re
from typing import NamedTuple, Optional, Union

from httpboot_core import constants
from httpboot_core.models.network_config_errors import ParseError

IPV4_PATTERN = re.compile(r"(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})", re.ASCII)
CIDR_PATTERN = re.compile(r"([0-9.]+)/(\d{1,2})", re.ASCII)

ALL_ONES = 0xFFFFFFFF


class Cidr(NamedTuple):
    """An IPv4 block: a canonical dotted-quad address and its prefix length"""

    address: str
    prefix_length: int

    def __str__(self) -> str:
        return f"{self.address}/{self.prefix_length}"


def parse_ip(text: str) -> str:
    """Parse a dotted-quad IPv4 address.

    Args:
        text: the address, e.g. "192.168.1.10"

    Returns:
        The canonical form of the address (leading zeros dropped).

    Raises:
        ParseError: If the text is not four integer octets in [0,255].
    """
    if not isinstance(text, str):
        raise ParseError(f"Invalid IP address format: {text!r}", text)

    match = IPV4_PATTERN.fullmatch(text.strip())
    if not match:
        raise ParseError(f"Invalid IP address format: {text}", text)

    octets = [int(octet) for octet in match.groups()]
    if any(octet > 255 for octet in octets):
        raise ParseError(f"Invalid IP address octets: {text}", text)

    return ".".join(str(octet) for octet in octets)


def parse_cidr(
    text: str,
    min_prefix_length: int = constants.MIN_PREFIX_LENGTH,
    max_prefix_length: int = constants.MAX_PREFIX_LENGTH,
) -> Cidr:
    """Parse CIDR notation with a mandatory prefix.

    Prefix lengths outside [min_prefix_length, max_prefix_length] are
    rejected even when they are legal CIDR.

    Raises:
        ParseError: If the text is not "a.b.c.d/n", an octet is out of range,
            or the prefix length is outside the accepted bounds.
    """
    if not isinstance(text, str):
        raise ParseError(f"Invalid CIDR format: {text!r}", text)

    match = CIDR_PATTERN.fullmatch(text.strip())
    if not match:
        raise ParseError(f"Invalid CIDR format: {text}", text)

    try:
        address = parse_ip(match.group(1))
    except ParseError as err:
        raise ParseError(f"Invalid CIDR network address: {err.message}", text)

    prefix_length = int(match.group(2))
    if not min_prefix_length <= prefix_length <= max_prefix_length:
        raise ParseError(
            f"Invalid CIDR prefix: /{prefix_length} "
            f"(must be between /{min_prefix_length} and /{max_prefix_length})",
            text,
        )

    return Cidr(address, prefix_length)


def ip_to_int(ip: str) -> int:
    """Big-endian integer value of a dotted-quad address"""
    a, b, c, d = (int(octet) for octet in parse_ip(ip).split("."))
    return a * 256**3 + b * 256**2 + c * 256 + d


def int_to_ip(value: int) -> str:
    if not 0 <= value <= ALL_ONES:
        raise ParseError(f"Not a 32-bit address value: {value}", value)
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def prefix_mask(prefix_length: int) -> int:
    # python ints are unbounded, so the shifted mask is cut back to 32 bits
    return (ALL_ONES << (32 - prefix_length)) & ALL_ONES


def _as_cidr(subnet: Union[Cidr, str]) -> Cidr:
    if isinstance(subnet, Cidr):
        return subnet
    return parse_cidr(subnet)


def is_in_subnet(ip: str, subnet: Union[Cidr, str]) -> bool:
    """True when ip shares the network bits of subnet"""
    subnet = _as_cidr(subnet)
    mask = prefix_mask(subnet.prefix_length)
    return ip_to_int(ip) & mask == ip_to_int(subnet.address) & mask


def is_in_range(ip: str, range_start: str, range_end: str) -> bool:
    """True when range_start <= ip <= range_end.

    A range whose start is above its end is empty, so nothing is inside it.
    """
    return ip_to_int(range_start) <= ip_to_int(ip) <= ip_to_int(range_end)


def network_address(subnet: Union[Cidr, str]) -> str:
    subnet = _as_cidr(subnet)
    return int_to_ip(ip_to_int(subnet.address) & prefix_mask(subnet.prefix_length))


def broadcast_address(subnet: Union[Cidr, str]) -> str:
    subnet = _as_cidr(subnet)
    mask = prefix_mask(subnet.prefix_length)
    return int_to_ip((ip_to_int(subnet.address) & mask) | (~mask & ALL_ONES))


def address_count(subnet: Union[Cidr, str]) -> int:
    """Number of addresses in the block, network and broadcast included"""
    return 2 ** (32 - _as_cidr(subnet).prefix_length)


def parse_port(value: Optional[Union[str, int]]) -> int:
    """Parse a TCP/UDP port number in [1,65535].

    Raises:
        ParseError: If the value is missing, not an integer, or out of range.
    """
    if value is None or isinstance(value, bool):
        raise ParseError(f"Invalid port: {value!r}", value)
    if isinstance(value, int):
        port = value
    else:
        text = str(value).strip()
        if not text.isascii() or not text.isdigit():
            raise ParseError(f"Port must be a number, got: {value}", value)
        port = int(text)

    if not constants.MIN_PORT <= port <= constants.MAX_PORT:
        raise ParseError(
            f"Port must be a number between {constants.MIN_PORT}-{constants.MAX_PORT}, got: {value}",
            value,
        )
    return port
