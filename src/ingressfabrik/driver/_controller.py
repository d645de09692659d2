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

"""FilterController: apply and remove per-interface ingress filters.

Each program is compiled in full before the first command is issued,
then executed strictly in order. The first failing command aborts the
program with a BackendError. Commands that already succeeded are NOT
rolled back; iptables has no transactions, so after a failure the
interface is left partially filtered. ``BackendError.applied`` says how
far the program got, for callers that want a best-effort cleanup.

Per interface::

    Unfiltered --apply--> Active --remove--> Unfiltered

No locking is done here. Inserts at position 1 of the shared base chain
must be serialized by the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from ingressfabrik.compiler import RuleCompiler, RuleProgram
from ingressfabrik.core import BackendError, PreconditionError
from ingressfabrik.core.options import FILTER_DEFAULTS, FilterConfig

if TYPE_CHECKING:
    from ingressfabrik.core import InterfaceFilter
    from ingressfabrik.driver._backend import Backend

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ApplyResult:
    """Outcome of a successful apply/remove."""

    program: RuleProgram
    applied: int


class FilterController:
    """Drives a Backend through compiled apply and removal programs."""

    def __init__(self, backend: Backend, config: FilterConfig = FILTER_DEFAULTS) -> None:
        self.backend = backend
        self.config = config
        self.compiler = RuleCompiler(config)

    def check_preconditions(self) -> None:
        """Raise PreconditionError unless the base and reject chains exist."""
        for chain in (self.config.base_chain, self.config.reject_chain):
            if not self.backend.chain_exists(chain):
                raise PreconditionError(chain)

    def run(self, program: RuleProgram) -> ApplyResult:
        """Execute *program* in order, stopping at the first failure."""
        for applied, operation in enumerate(program):
            result = self.backend.execute(operation)
            if not result.ok:
                raise BackendError(operation, result.output, applied)
        return ApplyResult(program, len(program))

    def apply(self, iface_filter: InterfaceFilter) -> ApplyResult:
        if iface_filter.allowlist is None:
            return ApplyResult(RuleProgram(), 0)  # Net Filtering disabled

        logger.debug(
            'NetFilter. Allowing ingress: %s for %s',
            iface_filter.allowlist,
            iface_filter.interface,
        )

        self.check_preconditions()

        program = self.compiler.compile(iface_filter.interface, iface_filter.allowlist)
        result = self.run(program)
        logger.info(
            'NetFilter: Successfully applied ingress filtering for %s', iface_filter.interface
        )
        return result

    def remove(self, iface_filter: InterfaceFilter) -> ApplyResult:
        """Detach and delete the interface's chain.

        Deletion is always attempted, even if apply never completed; a
        missing rule or chain surfaces as BackendError.
        """
        if iface_filter.allowlist is None:
            return ApplyResult(RuleProgram(), 0)

        logger.debug('NetFilter. Removing rules for %s', iface_filter.interface)
        return self.run(self.compiler.compile_removal(iface_filter.interface))
