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

"""Typed option keys and the filter configuration schema.

This module provides:

- **StrEnum keys**: Type-safe option key names that work as dict keys
- **Dataclass schema**: ``FilterConfig`` with the default chain names

Usage::

    from ingressfabrik.core.options import FilterConfig

    config = FilterConfig(base_chain='TEST-BASE', reject_chain='TEST-REJECT')
"""

from ingressfabrik.core.options._keys import (
    EndpointOption,
    FilterOption,
)
from ingressfabrik.core.options._schemas import (
    FILTER_DEFAULTS,
    FilterConfig,
)

__all__ = [
    'FILTER_DEFAULTS',
    'EndpointOption',
    'FilterConfig',
    'FilterOption',
]
