#!/usr/bin/env python3
"""
Main entry point for the taxshift CLI application.
"""

from taxshift.cli import app

if __name__ == "__main__":
    app()
