"""Entry point for python -m ndf."""

import sys

from .cli import main

sys.exit(main())
