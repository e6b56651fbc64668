#!python3 -X utf8

import sys

from headerlint.cli import main

if __name__ == '__main__':
    sys.exit(main())
