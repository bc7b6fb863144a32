"""Allow ``python -m jarvis``."""

from jarvis.main import main

main()
