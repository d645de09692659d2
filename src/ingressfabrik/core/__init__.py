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

from ._allowlist import (
    AddressRange,
    Allowlist,
    NetworkBlock,
    parse_allowlist,
    parse_network,
    parse_range,
)
from ._errors import (
    BackendError,
    ConfigError,
    IngressFilterError,
    ParseError,
    PreconditionError,
)
from ._interface_filter import InterfaceFilter
from ._yaml_reader import YamlReader, load_config

__all__ = [
    'AddressRange',
    'Allowlist',
    'BackendError',
    'ConfigError',
    'IngressFilterError',
    'InterfaceFilter',
    'NetworkBlock',
    'ParseError',
    'PreconditionError',
    'YamlReader',
    'load_config',
    'parse_allowlist',
    'parse_network',
    'parse_range',
]
