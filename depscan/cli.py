#!/usr/bin/env python3
"""
depscan - dependency scanner CLI

Scan directive-annotated source trees, resolve library closures and
generate loader manifests.
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from depscan.closure import scan_deps
from depscan.config import load_config
from depscan.manifest import extract_requires, gen_deps


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='depscan',
        description='Module dependency scanner and closure resolver',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--config',
        default=os.environ.get('DEPSCAN_CONFIG'),
        help='Path to depscan.yaml (default: $DEPSCAN_CONFIG or ./depscan.yaml)'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # scan-deps
    scan_parser = subparsers.add_parser('scan-deps', help='List library files the application depends on')
    scan_parser.add_argument('--app-root', help='Application directory (default: app_root from config)')

    # gen-deps
    gen_parser = subparsers.add_parser('gen-deps', help='Generate the dependency manifest')
    gen_parser.add_argument('targets', nargs='+', help='Directories to scan')
    gen_parser.add_argument('--base-path', required=True, help='Directory manifest paths are relative to')
    gen_parser.add_argument('--include-library', action='store_true', help='Also emit records for required library files')
    gen_parser.add_argument('--output', '-o', help='Write manifest to file instead of stdout')

    # extract-requires
    extract_parser = subparsers.add_parser('extract-requires', help="Print one file's requirements as a quoted list")
    extract_parser.add_argument('file', help='Source file to scan')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(Path(args.config) if args.config else None)

        if args.command == 'scan-deps':
            for path in scan_deps(config, args.app_root):
                print(path)
        elif args.command == 'gen-deps':
            text = gen_deps(args.base_path, args.targets, config, include_library=args.include_library)
            if args.output:
                out_path = Path(args.output)
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(text + '\n', encoding='utf-8')
            else:
                print(text)
        elif args.command == 'extract-requires':
            print(extract_requires(args.file, config.syntax))
        else:
            parser.print_help()
            sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
