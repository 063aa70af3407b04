#!/usr/bin/env python3
"""Entry point for deploying MyToken and Shop, e.g. `python deploy.py --network sepolia`."""

import sys
from shopdeploy.cli import main

if __name__ == "__main__":
    sys.exit(main())
