"""
Healthcheck module for the pricing container.

Verifies that the package and its dependencies import and that the
environment configuration validates.  It does not perform any lookup.
"""

import sys


def main() -> None:
    try:
        from pricing.config import PriceCacheSettings

        PriceCacheSettings.from_env()
    except Exception as exc:  # pragma: no cover - healthcheck only
        print(f"Healthcheck failed: {exc}", file=sys.stderr)
        sys.exit(1)
    print("ok")


if __name__ == "__main__":
    main()
