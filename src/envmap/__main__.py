"""Allow ``python -m envmap``."""

import sys

from envmap.cli import main

sys.exit(main())
