import sys

from passforge.cli import main

if __name__ == "__main__":
    sys.exit(main())
