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

"""InterfaceFilter: binds an interface name to its optional allowlist."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from ._allowlist import Allowlist, parse_allowlist
from .options import EndpointOption

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class InterfaceFilter:
    """Ingress filter for one interface.

    ``allowlist=None`` disables filtering: apply and remove are no-ops.
    """

    interface: str
    allowlist: Allowlist | None = None

    @property
    def enabled(self) -> bool:
        return self.allowlist is not None

    @classmethod
    def from_options(cls, interface: str, options: Mapping[str, Any]) -> InterfaceFilter:
        """Build a filter from an endpoint options mapping.

        The value under ``EndpointOption.INGRESS_ALLOWED`` may be an
        :class:`Allowlist`, an allowlist string (parsed here) or None.
        """
        logger.debug('New NetFilter for iface %s and options %s', interface, options)

        value = options.get(EndpointOption.INGRESS_ALLOWED)
        if isinstance(value, str):
            value = parse_allowlist(value, context=interface)
        elif value is not None and not isinstance(value, Allowlist):
            raise TypeError(
                f'{EndpointOption.INGRESS_ALLOWED} for {interface} must be an '
                f'Allowlist or a string, not {type(value).__name__}'
            )

        if value is None:
            logger.info('NetFilter: No network ingress filtering specified for %s', interface)
        return cls(interface, value)
