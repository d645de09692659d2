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

"""Mapping from an interface name to its dedicated chain name."""

from __future__ import annotations

# XT_EXTENSION_MAXNAMELEN (29) minus the terminating NUL.
MAX_CHAIN_NAME_LEN = 28


class ChainNamer:
    """Prefix-based chain naming.

    E.g., with the default prefix, "veth1a2b" -> "CONTAINER-veth1a2b".
    Names are never truncated, so distinct interfaces never share a chain.
    """

    def __init__(self, prefix: str = 'CONTAINER-') -> None:
        self.prefix = prefix

    def chain_for(self, interface: str) -> str:
        if not interface:
            raise ValueError('Interface name must not be empty')
        name = self.prefix + interface
        if len(name) > MAX_CHAIN_NAME_LEN:
            raise ValueError(
                f'Chain name {name!r} for interface {interface!r} exceeds '
                f'{MAX_CHAIN_NAME_LEN} characters'
            )
        return name
