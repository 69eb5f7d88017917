#!/usr/bin/env python3
"""
Run script for the repair shop order system database
"""

import argparse
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from repair_shop import create_app
from repair_shop.build import build_database, load_input_catalog
from repair_shop.logger import get_logger

logger = get_logger("repair_shop.run")


def parse_arguments(argv=None):
    """Parse command line arguments for build steps"""
    parser = argparse.ArgumentParser(description='Repair shop order system')
    parser.add_argument('--build', action='store_true',
                        help='Create any missing database tables')
    parser.add_argument('--rebuild', action='store_true',
                        help='Drop and recreate every table (destroys data)')
    parser.add_argument('--catalog', metavar='PATH',
                        help='Load input catalog entries from a JSON file')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    if not (args.build or args.rebuild or args.catalog):
        logger.warning("Nothing to do: pass --build, --rebuild or --catalog")
        return 1

    app = create_app()
    with app.app_context():
        if args.build or args.rebuild:
            build_database(drop_existing=args.rebuild)
        if args.catalog:
            load_input_catalog(args.catalog)
    return 0


if __name__ == '__main__':
    sys.exit(main())
