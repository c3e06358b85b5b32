"""Allow ``python -m filepacker``."""

from filepacker.pipeline import main

main()
