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

"""Compilation of allowlists into ordered iptables rule programs."""

from ._chain_namer import MAX_CHAIN_NAME_LEN, ChainNamer
from ._rule_compiler import RuleCompiler
from ._rule_operation import OperationKind, RuleOperation, RuleProgram

__all__ = [
    'MAX_CHAIN_NAME_LEN',
    'ChainNamer',
    'OperationKind',
    'RuleCompiler',
    'RuleOperation',
    'RuleProgram',
]
