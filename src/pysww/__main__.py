"""Allow ``python -m pysww``."""

import sys

from pysww.cli import main

sys.exit(main())
