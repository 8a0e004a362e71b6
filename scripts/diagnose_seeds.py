#!/usr/bin/env python3
"""Cave level structural diagnostics for specific seeds.

Usage:
  CAVERN_WIDTH=120 python scripts/diagnose_seeds.py 292372 730727

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cavern.dungeon.config import DungeonConfig  # noqa: E402 import after path fix
from cavern.dungeon.diagnostics import diagnose_seed  # noqa: E402 import after path fix

DEFAULT_SEEDS = [292372, 730727]


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    cfg = DungeonConfig.from_env()
    results = [diagnose_seed(s, cfg) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
