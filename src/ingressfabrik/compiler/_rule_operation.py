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

"""RuleOperation and RuleProgram: the compiler's output.

A RuleOperation is one iptables command, minus the binary and table
arguments which the backend adds. A RuleProgram is the ordered list of
operations the controller executes one at a time.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Sequence
from enum import StrEnum
from typing import overload


class OperationKind(StrEnum):
    """iptables command flags used by the filter."""

    CREATE_CHAIN = '-N'
    INSERT_RULE = '-I'
    APPEND_RULE = '-A'
    DELETE_RULE = '-D'
    FLUSH_CHAIN = '-F'
    DELETE_CHAIN = '-X'


@dataclasses.dataclass(frozen=True)
class RuleOperation:
    """A single rule-mutation command against one chain."""

    kind: OperationKind
    chain: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> tuple[str, ...]:
        return (str(self.kind), self.chain, *self.args)

    def __str__(self) -> str:
        return ' '.join(self.argv)


class RuleProgram(Sequence[RuleOperation]):
    """Immutable, ordered sequence of RuleOperations.

    The order is load-bearing: a chain must be created before rules are
    appended to it, and accept rules must precede the reject rule.
    """

    def __init__(self, operations: Iterable[RuleOperation] = ()) -> None:
        self._operations: tuple[RuleOperation, ...] = tuple(operations)

    @overload
    def __getitem__(self, index: int) -> RuleOperation: ...

    @overload
    def __getitem__(self, index: slice) -> RuleProgram: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RuleProgram(self._operations[index])
        return self._operations[index]

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[RuleOperation]:
        return iter(self._operations)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuleProgram):
            return self._operations == other._operations
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._operations)

    def __repr__(self) -> str:
        return f'RuleProgram({list(self._operations)!r})'
