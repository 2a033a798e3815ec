"""Main entry point for the dining bot"""

import sys

from diningbot_server.cli import main

if __name__ == '__main__':
    sys.exit(main())
