"""Allow ``python -m swiftts``."""

from swiftts.cli import main

main()
