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

"""YAML reader for the filter configuration file.

Example file::

    filter:
      base_chain: CONTAINERS
      reject_chain: CONTAINER-REJECT
      chain_prefix: CONTAINER-
      iptables: /usr/sbin/iptables
    interfaces:
      veth0: "10.0.0.0/24, 192.168.1.1-192.168.1.10"
      veth1: ""        # filtering disabled
"""

import dataclasses
import logging
import pathlib

import yaml

from ._errors import ConfigError
from ._interface_filter import InterfaceFilter
from .options import EndpointOption, FilterConfig, FilterOption

logger = logging.getLogger(__name__)

_FIELD_TYPES = {f.name: f.type for f in dataclasses.fields(FilterConfig)}


def _coerce_bools(d):
    """Coerce string booleans in a dict to Python bools.

    YAML normally handles this, but quoted values like ``"true"`` remain
    strings.
    """
    coerced = {}
    for k, v in d.items():
        if isinstance(v, str):
            low = v.lower()
            if low == 'true':
                coerced[k] = True
                continue
            if low == 'false':
                coerced[k] = False
                continue
        coerced[k] = v
    return coerced


class YamlReader:
    """Parses a configuration file into a FilterConfig and InterfaceFilters."""

    def __init__(self, base: FilterConfig | None = None):
        self._base = base or FilterConfig()

    def parse(self, input_path):
        input_path = pathlib.Path(input_path)
        try:
            with pathlib.Path.open(input_path, encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f'Cannot read {input_path}: {e}') from e
        except yaml.YAMLError as e:
            raise ConfigError(f'Invalid YAML in {input_path}: {e}') from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f'{input_path}: top level must be a mapping')

        config = self._parse_filter(data.get('filter') or {})
        filters = self._parse_interfaces(data.get('interfaces') or {})
        return config, filters

    def _parse_filter(self, section):
        if not isinstance(section, dict):
            raise ConfigError("'filter' must be a mapping")

        known = {str(o) for o in FilterOption}
        values = {}
        for key, value in _coerce_bools(section).items():
            if key not in known:
                logger.warning('Unknown filter option: %s', key)
                continue
            expected = _FIELD_TYPES[key]
            if not isinstance(value, expected):
                raise ConfigError(
                    f"filter option '{key}' must be {expected.__name__}, "
                    f'not {type(value).__name__}'
                )
            values[key] = value
        return dataclasses.replace(self._base, **values)

    def _parse_interfaces(self, section):
        if not isinstance(section, dict):
            raise ConfigError("'interfaces' must be a mapping of name to allowlist")

        filters = []
        for name, spec in section.items():
            if spec is not None and not isinstance(spec, str):
                raise ConfigError(
                    f'allowlist of interface {name} must be a string, '
                    f'not {type(spec).__name__}'
                )
            filters.append(
                InterfaceFilter.from_options(
                    str(name), {EndpointOption.INGRESS_ALLOWED: spec}
                )
            )
        return filters


def load_config(path, base: FilterConfig | None = None):
    """Read *path* and return ``(FilterConfig, [InterfaceFilter, ...])``."""
    return YamlReader(base).parse(path)
