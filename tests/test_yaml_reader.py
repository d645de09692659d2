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

"""Tests for loading the YAML configuration file."""

import logging
import textwrap

import pytest

from ingressfabrik.core import ConfigError, ParseError, load_config
from ingressfabrik.core.options import FILTER_DEFAULTS, FilterConfig


def _write(tmp_path, text):
    path = tmp_path / 'ingressfabrik.yml'
    path.write_text(textwrap.dedent(text), encoding='utf-8')
    return path


class TestLoadConfig:
    def test_full_file(self, tmp_path):
        path = _write(
            tmp_path,
            """\
            filter:
              base_chain: BASE
              reject_chain: REJ
              chain_prefix: IF-
              iptables: /usr/sbin/iptables
              table: filter
              wait: false
            interfaces:
              veth0: "10.0.0.0/24, 192.168.1.1-192.168.1.10"
              veth1: ""
              veth2:
            """,
        )
        config, filters = load_config(path)

        assert config == FilterConfig(
            base_chain='BASE',
            reject_chain='REJ',
            chain_prefix='IF-',
            iptables='/usr/sbin/iptables',
            table='filter',
            wait=False,
        )
        assert [f.interface for f in filters] == ['veth0', 'veth1', 'veth2']
        assert str(filters[0].allowlist) == '10.0.0.0/24, 192.168.1.1-192.168.1.10'
        assert filters[1].allowlist is None
        assert filters[2].allowlist is None

    def test_defaults(self, tmp_path):
        config, filters = load_config(_write(tmp_path, 'interfaces: {}\n'))
        assert config == FILTER_DEFAULTS
        assert filters == []

    def test_empty_file(self, tmp_path):
        assert load_config(_write(tmp_path, '')) == (FILTER_DEFAULTS, [])

    def test_base_config_is_overlaid(self, tmp_path):
        base = FilterConfig(base_chain='X', reject_chain='Y')
        config, _ = load_config(_write(tmp_path, 'filter:\n  base_chain: Z\n'), base)
        assert config.base_chain == 'Z'
        assert config.reject_chain == 'Y'

    def test_quoted_bool(self, tmp_path):
        config, _ = load_config(_write(tmp_path, 'filter:\n  wait: "false"\n'))
        assert config.wait is False

    def test_unknown_key_warns(self, tmp_path, caplog):
        path = _write(tmp_path, 'filter:\n  chain_prefx: X-\n')
        with caplog.at_level(logging.WARNING):
            config, _ = load_config(path)
        assert config == FILTER_DEFAULTS
        assert 'Unknown filter option: chain_prefx' in caplog.text

    @pytest.mark.parametrize(
        'text',
        [
            'filter:\n  wait: 3\n',
            'filter:\n  base_chain: true\n',
            'filter: [1, 2]\n',
            'interfaces: [veth0]\n',
            'interfaces:\n  veth0: 42\n',
            '- just\n- a list\n',
            'filter: {\n',
        ],
    )
    def test_malformed(self, tmp_path, text):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, text))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match='Cannot read'):
            load_config(tmp_path / 'missing.yml')

    def test_bad_allowlist_names_interface(self, tmp_path):
        path = _write(tmp_path, 'interfaces:\n  veth7: "10.0.0.1, bogus"\n')
        with pytest.raises(ParseError, match='veth7') as excinfo:
            load_config(path)
        assert excinfo.value.token == 'bogus'
