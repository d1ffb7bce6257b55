#!/usr/bin/env python3
"""
Bit arithmetic checker: proves the enumeration lemmas at a given counter width.
"""

import argparse
import logging
import sys

from powerset.logging import setup_color_logging
from powerset.metrics import log_counters
from powerset.solvers import prove_bit_lemmas

logger = logging.getLogger(__name__)


def main(args: argparse.Namespace) -> int:
    logger.info(f"Proving lemmas at width {args.width}...")
    results = prove_bit_lemmas(args.width, timeout_ms=args.timeout_ms)
    log_counters()
    failed = sorted(name for name, valid in results.items() if valid is not True)
    if failed:
        logger.error(f"Unproven: {', '.join(failed)}")
        return 1
    logger.info("All lemmas proved")
    return 0


parser = argparse.ArgumentParser(
    description=__doc__, formatter_class=argparse.ArgumentDefaultsHelpFormatter
)
parser.add_argument(
    "--width", type=int, default=64, help="Width of the subset counter in bits"
)
parser.add_argument(
    "--timeout-ms",
    type=int,
    default=60000,
    help="Timeout for each Z3 invocation in milliseconds",
)

if __name__ == "__main__":
    setup_color_logging(level=logging.INFO)
    args = parser.parse_args()
    sys.exit(main(args))
