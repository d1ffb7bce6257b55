#!/usr/bin/env python3
"""
Powerset enumeration example.

This script prints every subset of the given items, in order of increasing
bitmask, together with the size hint reported before the subset is consumed.
"""

import argparse
import itertools

from powerset.enumeration import powerset


def main(args: argparse.Namespace) -> None:
    """Print the first args.limit-many subsets of args.items."""
    print("Mask\tSize\tSubset")
    print("-" * 40)

    digits = max(1, len(args.items))
    subsets = powerset(args.items, width=args.width)
    for subset in itertools.islice(subsets, args.limit):
        lb, ub = subset.size_hint()
        assert lb == ub
        print(f"{subset.mask:0{digits}b}\t{lb}\t{list(subset)}")


parser = argparse.ArgumentParser(
    description=__doc__, formatter_class=argparse.ArgumentDefaultsHelpFormatter
)
parser.add_argument("items", nargs="*", default=list("abcd"), help="Items")
parser.add_argument(
    "--width", type=int, default=64, help="Width of the subset counter in bits"
)
parser.add_argument(
    "--limit", "-n", type=int, default=1000, help="Maximum number of subsets to print"
)

if __name__ == "__main__":
    args = parser.parse_args()
    main(args)
