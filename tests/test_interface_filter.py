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

"""Tests for building InterfaceFilters from endpoint options."""

import pytest

from ingressfabrik.core import Allowlist, InterfaceFilter, ParseError, parse_allowlist
from ingressfabrik.core.options import EndpointOption


class TestFromOptions:
    def test_missing_key_disables(self):
        f = InterfaceFilter.from_options('veth0', {})
        assert f.allowlist is None
        assert not f.enabled

    def test_none_disables(self):
        f = InterfaceFilter.from_options('veth0', {EndpointOption.INGRESS_ALLOWED: None})
        assert f.allowlist is None

    def test_preparsed_allowlist(self):
        allowlist = parse_allowlist('10.0.0.0/8')
        f = InterfaceFilter.from_options(
            'veth0', {EndpointOption.INGRESS_ALLOWED: allowlist}
        )
        assert f.allowlist is allowlist
        assert f.enabled

    def test_plain_string_key(self):
        f = InterfaceFilter.from_options('veth0', {'ingress_allowed': '10.0.0.1'})
        assert str(f.allowlist) == '10.0.0.1/32'

    def test_empty_string_disables(self):
        f = InterfaceFilter.from_options('veth0', {EndpointOption.INGRESS_ALLOWED: ''})
        assert f.allowlist is None

    def test_empty_allowlist_stays_enabled(self):
        f = InterfaceFilter.from_options(
            'veth0', {EndpointOption.INGRESS_ALLOWED: Allowlist()}
        )
        assert f.enabled

    def test_malformed_string(self):
        with pytest.raises(ParseError, match='veth0'):
            InterfaceFilter.from_options(
                'veth0', {EndpointOption.INGRESS_ALLOWED: '10.0.0.1, nope'}
            )

    @pytest.mark.parametrize('value', [42, ['10.0.0.1'], {'a': 1}])
    def test_wrong_type(self, value):
        with pytest.raises(TypeError, match='ingress_allowed'):
            InterfaceFilter.from_options('veth0', {EndpointOption.INGRESS_ALLOWED: value})
