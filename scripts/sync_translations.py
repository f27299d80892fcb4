"""Run one locale synchronization pass from a source checkout.

    python scripts/sync_translations.py [REFERENCE_FILE] [options]

Same as the `locale-sync` console script; see locale_sync/cli.py.
"""

import os
import sys

# Ensure the package is importable without installation
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from locale_sync.cli import main

if __name__ == "__main__":
    sys.exit(main())
