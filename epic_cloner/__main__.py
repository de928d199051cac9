"""Allow ``python -m epic_cloner``."""

from epic_cloner.main import main

main()
