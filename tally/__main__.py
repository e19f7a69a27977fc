"""Allow running as `python -m tally`."""

from .cli.main import main

main()
