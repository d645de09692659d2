# Copyright (C) 2026 Linuxfabrik <info@linuxfabrik.ch>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# On Debian systems, the complete text of the GNU General Public License
# version 2 can be found in /usr/share/common-licenses/GPL-2.
#
# SPDX-License-Identifier: GPL-2.0-or-later

"""Allowlist model and the parser for allowlist specification strings.

An allowlist string is a comma-separated list of tokens, each one of::

    10.0.0.1                    bare address (host route)
    10.0.0.0/24                 CIDR block
    192.168.1.1-192.168.1.10    inclusive address range

``parse_allowlist('')`` returns ``None``, which disables filtering for
the interface. That is different from an empty :class:`Allowlist`,
which rejects everything.
"""

from __future__ import annotations

import dataclasses
import ipaddress

from ._errors import ParseError

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


@dataclasses.dataclass(frozen=True)
class AddressRange:
    """Inclusive source address range, matched with ``-m iprange``."""

    start: IPAddress
    end: IPAddress

    def __str__(self) -> str:
        return f'{self.start}-{self.end}'


@dataclasses.dataclass(frozen=True)
class NetworkBlock:
    """Network address plus prefix length."""

    network: IPNetwork

    def __str__(self) -> str:
        return self.network.with_prefixlen


@dataclasses.dataclass(frozen=True)
class Allowlist:
    """Networks and ranges allowed to reach an interface.

    Relative order is kept within each tuple, but not across the two.
    """

    networks: tuple[NetworkBlock, ...] = ()
    ranges: tuple[AddressRange, ...] = ()

    def __bool__(self) -> bool:
        # Empty still means "reject all"; only None disables filtering.
        return True

    def __str__(self) -> str:
        return ', '.join(str(e) for e in (*self.networks, *self.ranges))

    def is_empty(self) -> bool:
        return not self.networks and not self.ranges


def parse_network(token: str) -> NetworkBlock | None:
    """Parse a bare address or CIDR; return None if *token* is neither.

    A bare address gets a full-length prefix. Host bits of a CIDR are
    masked off, so ``10.0.0.5/24`` yields ``10.0.0.0/24``. Only a decimal
    prefix length is accepted, not a netmask, and IPv6 scope ids are
    rejected.
    """
    if '%' in token:
        return None
    address, slash, prefix = token.partition('/')
    if not slash:
        prefix = '128' if ':' in address else '32'
    elif not (prefix.isascii() and prefix.isdigit()):
        return None
    try:
        return NetworkBlock(ipaddress.ip_network(f'{address}/{prefix}', strict=False))
    except ValueError:
        return None


def parse_range(token: str) -> AddressRange | None:
    """Parse ``start-end``; return None unless both endpoints are addresses."""
    if '%' in token:
        return None
    parts = token.split('-')
    if len(parts) != 2:
        return None
    try:
        start, end = (ipaddress.ip_address(p.strip()) for p in parts)
    except ValueError:
        return None
    return AddressRange(start, end)


def parse_allowlist(spec: str, context: str = '') -> Allowlist | None:
    """Parse an allowlist specification string.

    Parsing is all-or-nothing: the first malformed token raises
    :class:`ParseError` and no partial result is returned. *context* is
    prefixed to the error message (e.g. the interface name).
    """
    if spec == '':
        return None

    networks: list[NetworkBlock] = []
    ranges: list[AddressRange] = []
    for element in spec.split(','):
        element = element.strip()
        network = parse_network(element)
        if network is not None:
            networks.append(network)
            continue
        address_range = parse_range(element)
        if address_range is None:
            raise ParseError(element, context)
        ranges.append(address_range)

    return Allowlist(tuple(networks), tuple(ranges))
