"""Allow ``python -m boilerplate``."""

from boilerplate.cli import main

main()
