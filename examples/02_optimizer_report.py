#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi.api import load_source
from bfi.ops import emit
from bfi.optimizer import optimize
from bfi.parser import parse


def main():
    for name in ("hello_world.bf", "add_digits.bf"):
        source = load_source(os.path.join(os.path.dirname(__file__), name))
        ops = parse(source)
        result = optimize(ops)
        stats = result.stats
        print(f"== {name}: {len(ops)} -> {len(result.program)} ops in {stats.passes} passes")
        print(f"   chains folded: {stats.chains_folded}, zero cells: {stats.zero_cells}, transfers: {stats.transfers}")
        print(f"   {emit(result.program)}")


if __name__ == "__main__":
    main()
