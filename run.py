"""
Development runner for the LoginKit demo application.
This script runs the login window from a source checkout without installation.
"""

import os
import sys

# Add src directory to Python path for local development
sys.path.insert(0, os.path.abspath("src"))

from loginkit_gui.main import main

if __name__ == "__main__":
    raise SystemExit(main())
