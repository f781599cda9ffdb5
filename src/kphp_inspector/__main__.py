"""Allow running as ``python -m kphp_inspector``."""

from kphp_inspector.cli import main

if __name__ == "__main__":
    main()
