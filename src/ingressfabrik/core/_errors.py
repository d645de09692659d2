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

"""Exception types raised by the parser, the config reader and the controller."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ingressfabrik.compiler._rule_operation import RuleOperation


class IngressFilterError(Exception):
    """Base class for all ingress filter failures."""


class ParseError(IngressFilterError, ValueError):
    """An allowlist token is neither an IP, a CIDR nor an IP range."""

    def __init__(self, token: str, context: str = '') -> None:
        self.token = token
        msg = f'NetFilter: Could not parse IP, CIDR or IPRange {token!r}'
        if context:
            msg = f'{context}: {msg}'
        super().__init__(msg)


class ConfigError(IngressFilterError):
    """The configuration file is missing, unreadable or malformed."""


class PreconditionError(IngressFilterError):
    """A base chain the filter depends on does not exist."""

    def __init__(self, chain: str) -> None:
        self.chain = chain
        super().__init__(f'Expected iptables chain not found: {chain}')


class BackendError(IngressFilterError):
    """A rule-mutation command failed.

    ``applied`` is the number of operations of the program that had
    already succeeded. They stay in place: nothing is rolled back.
    """

    def __init__(self, operation: RuleOperation, output: str, applied: int) -> None:
        self.operation = operation
        self.output = output
        self.applied = applied
        super().__init__(
            f'NetFilter. IP tables apply rule failed {list(operation.argv)} {output.strip()}'
        )
