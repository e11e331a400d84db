#!/usr/bin/env python3
"""
Print the candidate field names for database column identifiers.

Usage:
    osm-names user_id http_url
    osm-names --fields UserID,HomeURL user_id home_url
"""

import argparse
import logging
import sys

from core.logging import configure_logging
from db.lib.naming import camel_names, resolve_field

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Convert snake_case column names to camel-case field names'
    )
    parser.add_argument(
        'identifiers',
        nargs='+',
        help='Column identifiers, e.g. user_id'
    )
    parser.add_argument(
        '--fields',
        type=str,
        help='Comma-separated field names; print which one each column resolves to'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Logging level (default: OSM_LOG_LEVEL or INFO)'
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    fields = None
    if args.fields:
        fields = {name.strip(): name.strip() for name in args.fields.split(',') if name.strip()}
        logger.debug(f"[CLI] Resolving against {len(fields)} fields")

    missing = 0
    for identifier in args.identifiers:
        plain, special = camel_names(identifier)
        if fields is None:
            print(f"{identifier}\t{plain}\t{special}")
            continue
        name, _ = resolve_field(fields, identifier)
        if not name:
            missing += 1
            name = "-"
        print(f"{identifier}\t{name}")

    # Non-zero exit when some column matched no field
    return 1 if missing else 0


if __name__ == '__main__':
    sys.exit(main())
