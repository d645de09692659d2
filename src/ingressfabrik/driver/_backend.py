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

"""Backends that execute RuleOperations against the packet filter."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING, NamedTuple, Protocol

from ingressfabrik.core.options import FILTER_DEFAULTS, FilterConfig

if TYPE_CHECKING:
    from ingressfabrik.compiler import RuleOperation

logger = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Backend(Protocol):
    """What the controller needs from the packet-filtering subsystem.

    ``execute`` reports failure through the returned CommandResult and
    does not raise for a rejected command.
    """

    def execute(self, operation: RuleOperation) -> CommandResult: ...

    def chain_exists(self, chain: str) -> bool: ...


class IptablesBackend:
    """Runs each operation as one blocking ``iptables`` invocation."""

    def __init__(self, config: FilterConfig = FILTER_DEFAULTS) -> None:
        self.config = config

    def _base_cmd(self) -> list[str]:
        cmd = [self.config.iptables]
        if self.config.wait:
            cmd.append('--wait')
        cmd += ['-t', self.config.table]
        return cmd

    def _run(self, args: list[str]) -> CommandResult:
        cmd = self._base_cmd() + args
        logger.debug('NetFilter. IpTables call %s', args)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            return CommandResult(127, str(e))
        return CommandResult(proc.returncode, proc.stdout + proc.stderr)

    def execute(self, operation: RuleOperation) -> CommandResult:
        return self._run(list(operation.argv))

    def chain_exists(self, chain: str) -> bool:
        return self._run(['-n', '-L', chain]).ok
