"""Allow running as ``python -m boxgen``."""

import sys

from boxgen.cli import main

sys.exit(main())
