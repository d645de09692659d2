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

"""Canonical option key definitions using StrEnum.

Keys shared between the YAML configuration reader, the CLI and the
controller. Since StrEnum members are ``str``, they work directly as
dict keys and as YAML mapping keys.

Example:
    from ingressfabrik.core.options import EndpointOption

    filter = InterfaceFilter.from_options(
        'veth0', {EndpointOption.INGRESS_ALLOWED: allowlist}
    )
"""

from enum import StrEnum


class FilterOption(StrEnum):
    """Keys of the ``filter:`` section of the configuration file.

    Each key maps one-to-one to a field of ``FilterConfig``.
    """

    # Chains
    BASE_CHAIN = 'base_chain'
    REJECT_CHAIN = 'reject_chain'
    CHAIN_PREFIX = 'chain_prefix'

    # iptables invocation
    IPTABLES = 'iptables'
    TABLE = 'table'
    WAIT = 'wait'


class EndpointOption(StrEnum):
    """Per-interface endpoint option keys."""

    INGRESS_ALLOWED = 'ingress_allowed'
