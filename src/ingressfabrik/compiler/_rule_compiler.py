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

"""RuleCompiler: allowlist -> ordered RuleProgram.

The apply program for interface ``veth0`` with the default chains and
allowlist ``10.0.0.0/24, 192.168.1.1-192.168.1.10`` is::

    -N CONTAINER-veth0
    -A CONTAINER-veth0 -s 10.0.0.0/24 -j ACCEPT
    -A CONTAINER-veth0 -m iprange --src-range 192.168.1.1-192.168.1.10 -j ACCEPT
    -A CONTAINER-veth0 -j CONTAINER-REJECT
    -I CONTAINERS 1 -o veth0 -j CONTAINER-veth0

The jump into the dedicated chain is emitted last, so the chain is fully
populated before any traffic is sent to it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ingressfabrik.compiler._chain_namer import ChainNamer
from ingressfabrik.compiler._rule_operation import (
    OperationKind,
    RuleOperation,
    RuleProgram,
)
from ingressfabrik.core.options import FILTER_DEFAULTS, FilterConfig

if TYPE_CHECKING:
    from ingressfabrik.core import Allowlist


class RuleCompiler:
    """Compile apply and removal programs for one interface at a time."""

    def __init__(self, config: FilterConfig = FILTER_DEFAULTS) -> None:
        self.config = config
        self.namer = ChainNamer(config.chain_prefix)

    def chain_for(self, interface: str) -> str:
        return self.namer.chain_for(interface)

    def _jump_args(self, interface: str, chain: str) -> tuple[str, ...]:
        return ('-o', interface, '-j', chain)

    def compile(self, interface: str, allowlist: Allowlist) -> RuleProgram:
        """Return the program that installs *allowlist* for *interface*."""
        chain = self.chain_for(interface)
        ops = [RuleOperation(OperationKind.CREATE_CHAIN, chain)]

        # Allow specified nets and ranges only
        for network in allowlist.networks:
            ops.append(
                RuleOperation(
                    OperationKind.APPEND_RULE,
                    chain,
                    ('-s', str(network), '-j', 'ACCEPT'),
                )
            )
        for address_range in allowlist.ranges:
            ops.append(
                RuleOperation(
                    OperationKind.APPEND_RULE,
                    chain,
                    ('-m', 'iprange', '--src-range', str(address_range), '-j', 'ACCEPT'),
                )
            )

        ops.append(
            RuleOperation(
                OperationKind.APPEND_RULE, chain, ('-j', self.config.reject_chain)
            )
        )

        # Jump from the base chain for all traffic going out to the interface
        ops.append(
            RuleOperation(
                OperationKind.INSERT_RULE,
                self.config.base_chain,
                ('1', *self._jump_args(interface, chain)),
            )
        )
        return RuleProgram(ops)

    def compile_removal(self, interface: str) -> RuleProgram:
        """Return the program that detaches and deletes the interface's chain."""
        chain = self.chain_for(interface)
        return RuleProgram(
            [
                RuleOperation(
                    OperationKind.DELETE_RULE,
                    self.config.base_chain,
                    self._jump_args(interface, chain),
                ),
                RuleOperation(OperationKind.FLUSH_CHAIN, chain),
                RuleOperation(OperationKind.DELETE_CHAIN, chain),
            ]
        )
