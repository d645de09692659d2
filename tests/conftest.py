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

"""Shared pytest fixtures: an in-memory iptables filter table."""

import pytest

from ingressfabrik.compiler import OperationKind, RuleOperation
from ingressfabrik.core.options import FilterConfig
from ingressfabrik.driver import CommandResult, FilterController

BUILTIN_TARGETS = frozenset({'ACCEPT', 'DROP', 'REJECT', 'RETURN'})

NO_CHAIN = 'iptables: No chain/target/match by that name.\n'
BAD_RULE = 'iptables: Bad rule (does a matching rule exist in that chain?).\n'


class FakeIptables:
    """Stateful stand-in for one iptables table.

    Mirrors the iptables error cases the filter can run into: creating an
    existing chain, touching a missing chain, jumping to a missing target,
    deleting a missing rule, and deleting a non-empty or referenced chain.

    ``fail_on`` holds operation strings (``str(RuleOperation)``) that are
    rejected with an injected error. ``executed`` records every operation
    passed to ``execute``, including failed ones.
    """

    def __init__(self, chains=()):
        self.chains: dict[str, list[tuple[str, ...]]] = {c: [] for c in chains}
        self.fail_on: set[str] = set()
        self.executed: list[RuleOperation] = []

    def chain_exists(self, chain: str) -> bool:
        return chain in self.chains

    def snapshot(self) -> dict[str, list[tuple[str, ...]]]:
        return {c: list(rules) for c, rules in self.chains.items()}

    def _target_ok(self, rule: tuple[str, ...]) -> bool:
        if '-j' not in rule:
            return True
        target = rule[rule.index('-j') + 1]
        return target in BUILTIN_TARGETS or target in self.chains

    def _referenced(self, chain: str) -> bool:
        return any(
            '-j' in rule and rule[rule.index('-j') + 1] == chain
            for rules in self.chains.values()
            for rule in rules
        )

    def execute(self, operation: RuleOperation) -> CommandResult:
        self.executed.append(operation)
        if str(operation) in self.fail_on:
            return CommandResult(1, 'injected failure\n')

        kind, chain, args = operation.kind, operation.chain, operation.args

        if kind == OperationKind.CREATE_CHAIN:
            if chain in self.chains:
                return CommandResult(1, 'iptables: Chain already exists.\n')
            self.chains[chain] = []
            return CommandResult(0, '')

        if chain not in self.chains:
            return CommandResult(1, NO_CHAIN)
        rules = self.chains[chain]

        if kind == OperationKind.APPEND_RULE:
            if not self._target_ok(args):
                return CommandResult(1, NO_CHAIN)
            rules.append(args)
        elif kind == OperationKind.INSERT_RULE:
            position, rule = 1, args
            if args and args[0].isdigit():
                position, rule = int(args[0]), args[1:]
            if position > len(rules) + 1:
                return CommandResult(1, 'iptables: Index of insertion too big.\n')
            if not self._target_ok(rule):
                return CommandResult(1, NO_CHAIN)
            rules.insert(position - 1, rule)
        elif kind == OperationKind.DELETE_RULE:
            if args not in rules:
                return CommandResult(1, BAD_RULE)
            rules.remove(args)
        elif kind == OperationKind.FLUSH_CHAIN:
            rules.clear()
        elif kind == OperationKind.DELETE_CHAIN:
            if rules:
                return CommandResult(1, 'iptables: Directory not empty.\n')
            if self._referenced(chain):
                return CommandResult(1, 'iptables: Too many links.\n')
            del self.chains[chain]
        return CommandResult(0, '')


@pytest.fixture()
def config():
    """Disposable chain names, so nothing collides with a real ruleset."""
    return FilterConfig(
        base_chain='TEST-BASE',
        reject_chain='TEST-REJECT',
        chain_prefix='TEST-',
    )


@pytest.fixture()
def backend(config):
    """Fake table with the base and reject chains; the base chain holds one foreign rule."""
    fake = FakeIptables([config.base_chain, config.reject_chain])
    fake.chains[config.base_chain].append(('-o', 'eth0', '-j', 'ACCEPT'))
    fake.chains[config.reject_chain].append(('-j', 'REJECT'))
    return fake


@pytest.fixture()
def controller(backend, config):
    return FilterController(backend, config)
