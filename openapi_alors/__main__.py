"""Allow running as ``python -m openapi_alors``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
