#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi.api import RunOptions, run_file


def main():
    path = os.path.join(os.path.dirname(__file__), "add_digits.bf")
    for engine in ("python", "jit"):
        result = run_file(path, b"34", options=RunOptions(engine=engine))
        print(f"{engine}: 3 + 4 = {result.output.decode('ascii')}")


if __name__ == "__main__":
    main()
