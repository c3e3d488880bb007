#!/usr/bin/env python3
"""
RC5 Command Line Interface launcher.

Runs the rc5 CLI from a source checkout without installing the package.

Usage:
    python python-cli/main.py encrypt --key HEX --block HEX
    python python-cli/main.py constants --width 32
"""

import sys
import os

# Add python-core to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'python-core'))

from rc5_core.cli import main


if __name__ == '__main__':
    sys.exit(main())
