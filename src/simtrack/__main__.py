"""Allow ``python -m simtrack``."""

from simtrack.ui.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
