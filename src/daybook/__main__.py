# =============================================================================
# Daybook Entry Point for `python -m daybook`
# =============================================================================
# This module allows Daybook to be run as a Python module:
#
#   python -m daybook
#
# This is equivalent to running the 'daybook' command after installation.
# =============================================================================

import sys

from daybook.app import main

if __name__ == "__main__":
    sys.exit(main())
