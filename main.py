import sys

from tetris_app import main

if __name__ == '__main__':
    sys.exit(main())
