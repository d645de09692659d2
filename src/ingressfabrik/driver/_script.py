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

"""Render a RuleProgram as a standalone shell script (dry run).

A copy of ``ingress_filter.sh.j2`` placed in
``~/ingressfabrik/templates/`` replaces the packaged one.
"""

from __future__ import annotations

import getpass
import importlib.resources
import shlex
import time
from pathlib import Path
from typing import TYPE_CHECKING

import jinja2

import ingressfabrik
from ingressfabrik.core.options import FILTER_DEFAULTS, FilterConfig

if TYPE_CHECKING:
    from ingressfabrik.compiler import RuleProgram

SCRIPT_TEMPLATE = 'ingress_filter.sh.j2'


def _script_environment() -> jinja2.Environment:
    search_paths: list[str] = []

    override_dir = Path.home() / 'ingressfabrik' / 'templates'
    if (override_dir / SCRIPT_TEMPLATE).is_file():
        search_paths.append(str(override_dir))

    packaged = importlib.resources.files('ingressfabrik') / 'resources' / 'templates'
    search_paths.append(str(packaged / 'iptables'))

    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(search_paths),
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    # every argv word and path goes through shquote
    env.filters['shquote'] = shlex.quote
    return env


def render_script(
    program: RuleProgram,
    config: FilterConfig = FILTER_DEFAULTS,
    action: str = 'apply',
    interface: str = '',
    timestamp: bool = True,
) -> str:
    """Return a ``set -e`` shell script running *program* line by line.

    *timestamp* can be disabled to get reproducible output.
    """
    if timestamp:
        timestr = time.strftime('%a %b %d %H:%M:%S %Y')
        try:
            user_name = getpass.getuser()
        except (KeyError, OSError):
            user_name = 'unknown'
    else:
        timestr = ''
        user_name = ''

    context = {
        'version': ingressfabrik.__version__,
        'timestamp': timestr,
        'user': user_name,
        'action': action,
        'interface': interface,
        'iptables_path': config.iptables,
        'wait': config.wait,
        'table': config.table,
        'base_chain': config.base_chain,
        'reject_chain': config.reject_chain,
        'operations': [list(op.argv) for op in program],
    }

    template = _script_environment().get_template(SCRIPT_TEMPLATE)
    return template.render(context)
