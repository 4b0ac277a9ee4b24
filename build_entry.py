import sys
import os

# Make the py_rv_builder package importable when frozen
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from py_rv_builder.cli import main

if __name__ == '__main__':
    sys.exit(main())
