#!/usr/bin/env python3
"""
Convenience entry point for running housekeepinghub directly.

Usage: python run_hub.py [command] [options]
"""

from housekeepinghub.cli.app import app

if __name__ == "__main__":
    app()
