from __future__ import annotations

import sys

from visiontrack.app.bootstrap import run


def main() -> int:
    return run(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
