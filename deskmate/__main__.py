"""Allow ``python -m deskmate``."""

import sys

from deskmate.launcher import main

if __name__ == "__main__":
    sys.exit(main())
