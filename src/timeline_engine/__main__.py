"""Allow ``python -m timeline_engine``."""

from timeline_engine.cli import main

main()
