#!/usr/bin/env python3
"""
Convenience entry point for running the reservas CLI directly.

Usage: python main.py [command] [options]
"""

from reservas.cli.app import app

if __name__ == "__main__":
    app()
