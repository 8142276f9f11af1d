"""Entry point: run fzmedia from a source checkout."""

import sys

from fzmedia.cli import main

if __name__ == '__main__':
    sys.exit(main())
