"""Allow running batterylogd with python -m batterylog."""

import sys

from batterylog.cli import main

sys.exit(main())
