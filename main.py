"""Quick Tabs entry point."""

import sys

from quick_tabs.cli import main

if __name__ == "__main__":
    sys.exit(main())
