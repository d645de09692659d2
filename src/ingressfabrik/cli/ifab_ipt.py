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

"""CLI entry point for per-interface ingress filtering with iptables."""

import argparse
import dataclasses
import logging
import sys

import ingressfabrik
from ingressfabrik.compiler import RuleCompiler
from ingressfabrik.core import (
    BackendError,
    IngressFilterError,
    InterfaceFilter,
    load_config,
)
from ingressfabrik.core.options import EndpointOption, FilterConfig
from ingressfabrik.driver import FilterController, IptablesBackend, render_script

__author__ = 'Linuxfabrik GmbH, Zurich/Switzerland'

DESCRIPTION = """Ingress allowlist filter for iptables. Compiles an allowlist of IPs, CIDRs and
IP ranges into a dedicated per-interface chain and hooks it into a shared base
chain."""

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='ifab-ipt',
        description=DESCRIPTION,
    )

    parser.add_argument(
        'COMMAND',
        choices=['compile', 'apply', 'remove'],
        help='compile: print the shell script; apply/remove: run it against iptables',
    )

    parser.add_argument(
        '-c',
        '--config',
        default='',
        dest='CONFIG',
        help='path to a YAML configuration file',
    )

    parser.add_argument(
        '-i',
        '--interface',
        default='',
        dest='INTERFACE',
        help='interface to filter. Without it, every interface in the config file is used',
    )

    parser.add_argument(
        '-a',
        '--allow',
        default=None,
        dest='ALLOW',
        help='allowlist for --interface, e.g. "10.0.0.0/24, 192.168.1.1-192.168.1.10". '
        'Overrides the config file entry',
    )

    parser.add_argument(
        '--removal',
        action='store_true',
        dest='REMOVAL',
        help='with compile: print the removal script instead of the apply script',
    )

    parser.add_argument(
        '--base-chain',
        default=None,
        dest='BASE_CHAIN',
        help='shared chain the per-interface jump is inserted into',
    )

    parser.add_argument(
        '--reject-chain',
        default=None,
        dest='REJECT_CHAIN',
        help='chain jumped to when no allow rule matches',
    )

    parser.add_argument(
        '--prefix',
        default=None,
        dest='CHAIN_PREFIX',
        help='prefix of the per-interface chain name',
    )

    parser.add_argument(
        '--iptables',
        default=None,
        dest='IPTABLES',
        help='path to the iptables binary',
    )

    parser.add_argument(
        '-v',
        '--verbose',
        action='count',
        default=0,
        dest='VERBOSE',
        help='verbose output (repeat for higher verbosity)',
    )

    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s: v{ingressfabrik.__version__} by {__author__}',
    )

    return parser.parse_args(argv)


def build_config(args, base: FilterConfig) -> FilterConfig:
    """Apply command line overrides on top of *base*."""
    overrides = {
        'base_chain': args.BASE_CHAIN,
        'reject_chain': args.REJECT_CHAIN,
        'chain_prefix': args.CHAIN_PREFIX,
        'iptables': args.IPTABLES,
    }
    return dataclasses.replace(
        base, **{k: v for k, v in overrides.items() if v is not None}
    )


def select_filters(args, filters: list[InterfaceFilter]) -> list[InterfaceFilter]:
    if args.ALLOW is not None and not args.INTERFACE:
        raise IngressFilterError('--allow requires --interface')
    if not args.INTERFACE:
        return filters
    if args.ALLOW is not None:
        return [
            InterfaceFilter.from_options(
                args.INTERFACE, {EndpointOption.INGRESS_ALLOWED: args.ALLOW}
            )
        ]
    selected = [f for f in filters if f.interface == args.INTERFACE]
    if not selected:
        msg = f"interface '{args.INTERFACE}' not found in configuration"
        raise IngressFilterError(msg)
    return selected


def main(argv=None):
    args = parse_args(argv)
    level = LOG_LEVELS[min(args.VERBOSE, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format='%(levelname)s: %(name)s: %(message)s')

    try:
        if args.CONFIG:
            config, filters = load_config(args.CONFIG)
        else:
            config, filters = FilterConfig(), []
        config = build_config(args, config)
        filters = select_filters(args, filters)
    except IngressFilterError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    if not filters:
        print('Error: no interface given (use -i or -c)', file=sys.stderr)
        return 1

    if args.COMMAND == 'compile':
        compiler = RuleCompiler(config)
        for f in filters:
            if f.allowlist is None:
                print(f'# {f.interface}: filtering disabled', file=sys.stderr)
                continue
            try:
                if args.REMOVAL:
                    program = compiler.compile_removal(f.interface)
                else:
                    program = compiler.compile(f.interface, f.allowlist)
            except ValueError as e:
                print(f'Error: {e}', file=sys.stderr)
                return 1
            action = 'remove' if args.REMOVAL else 'apply'
            print(render_script(program, config, action, f.interface), end='')
        return 0

    controller = FilterController(IptablesBackend(config), config)
    operation = controller.apply if args.COMMAND == 'apply' else controller.remove
    for f in filters:
        try:
            result = operation(f)
        except BackendError as e:
            print(f'Error: {f.interface}: {e}', file=sys.stderr)
            print(
                f'{e.applied} operation(s) were applied before the failure '
                'and have not been rolled back',
                file=sys.stderr,
            )
            return 1
        except (IngressFilterError, ValueError) as e:
            print(f'Error: {f.interface}: {e}', file=sys.stderr)
            return 1
        print(
            f'{f.interface}: {args.COMMAND} done ({result.applied} operation(s))',
            file=sys.stderr,
        )

    return 0


if __name__ == '__main__':
    sys.exit(main())
