"""Allow running viewboxpath as ``python -m viewboxpath``."""

import sys

from .cli import main

sys.exit(main())
