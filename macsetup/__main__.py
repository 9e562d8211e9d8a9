"""Allow ``python -m macsetup``."""

from macsetup.main import main

main()
