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

"""Typed filter configuration with shared defaults.

``FilterConfig`` is passed explicitly to the compiler, the controller
and the iptables backend. Nothing reads chain names from module
globals, so tests can run against disposable chains.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FilterConfig:
    """Chain names and iptables invocation settings."""

    # Shared chain every interface's traffic passes through; the jump
    # into the dedicated chain is inserted at position 1.
    base_chain: str = 'CONTAINERS'
    # Target of the default-deny rule at the end of each dedicated chain.
    reject_chain: str = 'CONTAINER-REJECT'
    # Dedicated chain name is chain_prefix + interface name.
    chain_prefix: str = 'CONTAINER-'

    iptables: str = 'iptables'
    table: str = 'filter'
    wait: bool = True  # pass --wait to serialize on the xtables lock


FILTER_DEFAULTS = FilterConfig()
