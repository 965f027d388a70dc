#!/usr/bin/env python3
"""
PdfRearrange - Entry point for python -m pdfrearrange

This module allows the package to be run as a module:
    python -m pdfrearrange
"""

import sys

from pdfrearrange import main

if __name__ == "__main__":
    sys.exit(main())
