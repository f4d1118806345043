from __future__ import annotations

from vdview_core.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
