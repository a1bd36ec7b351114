#!/usr/bin/env python3
"""
Main entry point for Town Generator
"""
import sys

from towngen.cli import main


if __name__ == '__main__':
    sys.exit(main())
