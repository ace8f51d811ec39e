"""Allow running with ``python -m evade``."""
import sys

from evade.main import main

sys.exit(main())
