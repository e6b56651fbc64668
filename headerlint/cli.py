"""
Command line interface: `headerlint check`, `headerlint config check` and `headerlint template`.
"""
from typing import Any
import sys
import os
import argparse
from pathlib import Path
import logging

##################################################################################################
# Main
##################################################################################################

ArgParser = argparse.ArgumentParser

class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.parsers = {}
        self.subparsers = {}

    class Command:
        def __init__(self, commands: 'Commands', name: str) -> None:
            path = name.split('/')
            parsers = commands.parsers
            subparsers = commands.subparsers

            def subcommand(i: int) -> str:
                if i == 0: return 'command'
                return ('sub' * i) + 'command'

            if '' not in parsers:
                parsers[''] = commands.root_parser

            if '' not in subparsers:
                subparsers[''] = commands.root_parser.add_subparsers(dest='command')

            for i in range(1, len(path) + 1):
                p = '/'.join(path[:i])
                p0 = '/'.join(path[:i-1])
                if p not in parsers:
                    parsers[p] = subparsers[p0].add_parser(path[i-1])
                if p not in subparsers and i != len(path):
                    subparsers[p] = parsers[p].add_subparsers(dest=subcommand(i))

            self.parser = parsers[name]

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str) -> 'Commands.Command':
        return Commands.Command(self, name)


def add_config_arguments(cmd: ArgParser, overrides: bool = True) -> None:
    cmd.add_argument('--config', type=Path, default=None, help='Config file (default: ./headerlint.yml if present).')
    if overrides:
        cmd.add_argument('--force-current-year', action='store_true', default=None, help='Require the copyright year to be the current year.')
        cmd.add_argument('--code-owner', type=str, default=None, help='Copyright owner expected in the header.')


def main() -> int:
    if sys.platform.lower() == "win32":
        os.system('color')
        os.system('chcp 65001 > nul')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore

    parser = argparse.ArgumentParser(description='Checks that source files start with the corporate header.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    commands = Commands(parser)

    with commands('check') as cmd:
        cmd.add_argument('path', type=str, nargs='?', default='.', help='Directory or file to check.')
        add_config_arguments(cmd)

    with commands('config/check') as cmd:
        add_config_arguments(cmd, overrides=False)

    with commands('template') as cmd:
        add_config_arguments(cmd)

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    if args.command is None:
        parser.print_help()
        return 0

    match args.command:
        case 'check':
            from headerlint.config import load_config
            from headerlint.tasks.check import check_main
            config = load_config(args.config).with_overrides(args.force_current_year, args.code_owner)
            return 1 if check_main(args.path, config) else 0

        case 'config':
            match args.subcommand:
                case 'check':
                    from headerlint.tasks.check_config import check_config
                    check_config(args.config)
                    return 0
                case _:
                    parser.parse_args(['config', '--help'])

        case 'template':
            from headerlint.config import load_config
            from headerlint.tasks.template import render_template
            config = load_config(args.config).with_overrides(args.force_current_year, args.code_owner)
            sys.stdout.write(render_template(config))
            return 0

        case _:
            raise ValueError(f"Unknown command: {args.command}")

    return 0
