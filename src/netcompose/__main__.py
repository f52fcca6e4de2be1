# File Chain (see DEVELOPER.md):
# Doc Version: v1.0.0
#
# - Called by: Python interpreter when running `python -m netcompose`
# - Calls into: src/netcompose/main.main()
"""Allow running the package with python -m netcompose (same as the netcompose console script)."""
import sys

from netcompose.main import main

sys.exit(main())
