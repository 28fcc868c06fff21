# ABOUTME: Entry point for launching the interactive career-terms CLI.
# ABOUTME: Provides simple command to run: python -m traveller_chargen.interface --stats 7,8,8,9,7,6

import sys

from traveller_chargen.interface.career_cli import main

if __name__ == "__main__":
    sys.exit(main())
