#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi.api import run_file


def main():
    path = os.path.join(os.path.dirname(__file__), "hello_world.bf")
    result = run_file(path)
    sys.stdout.write(result.output.decode("ascii"))
    print(f"executed {result.stats.executed} instructions, tape has {len(result.tape)} cells")


if __name__ == "__main__":
    main()
