#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32 Instruction Builder Command Line Interface
"""

import sys
from .main import main


if __name__ == '__main__':
    sys.exit(main())
