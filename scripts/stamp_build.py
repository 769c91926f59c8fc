#!/usr/bin/env python3
"""
Stamp the build-time version identity into versioncheck/_build.py.

Usage:
    python scripts/stamp_build.py --sequence 8 --label 1.3.0
"""

import argparse
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from versioncheck.build import render_build_module

BUILD_MODULE = Path(__file__).parent.parent / "versioncheck" / "_build.py"


def main():
    parser = argparse.ArgumentParser(description="Write build sequence and version label into the package")
    parser.add_argument("--sequence", type=int, required=True,
                       help="Monotonically increasing build number")
    parser.add_argument("--label", required=True,
                       help="Human-readable version label, e.g. 1.3.0")
    parser.add_argument("--output", type=Path, default=BUILD_MODULE,
                       help="Module to write (default: versioncheck/_build.py)")

    args = parser.parse_args()

    try:
        source = render_build_module(args.sequence, args.label)
    except ValueError as e:
        print(f"❌ Invalid build identity: {e}")
        sys.exit(1)

    args.output.write_text(source, encoding="utf-8")
    print(f"✓ Stamped {args.sequence}/{args.label} into {args.output}")


if __name__ == "__main__":
    main()
