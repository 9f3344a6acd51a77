#!/usr/bin/env python3
"""
Main entry point for the web.xml auto-reconfiguration CLI.
"""

import sys
from autoreconf.cli.modify_cli import main

if __name__ == "__main__":
    sys.exit(main())
