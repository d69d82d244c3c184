#!/usr/bin/env python3
"""
Schema validation script for event contracts.

Thin wrapper over ``eventgov.cli`` for running from a checkout;
installed environments get the ``eventgov-schemas`` command.
"""

import sys

from eventgov.cli import main


if __name__ == "__main__":
    sys.exit(main())
