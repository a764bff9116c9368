"""Allow ``python -m importmap``."""

from importmap import main

main()
