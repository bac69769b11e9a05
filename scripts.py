#!/usr/bin/env python3
"""Development scripts for the Seating Rules service."""

import subprocess
import sys


def start():
    """Start the development server."""
    subprocess.run([
        "uvicorn",
        "seating_rules.main:app",
        "--host", "0.0.0.0",
        "--port", "3000",
        "--reload"
    ])


def test():
    """Run the test suite."""
    result = subprocess.run(["pytest", "tests/"])
    sys.exit(result.returncode)


def lint():
    """Run linting and type checking."""
    subprocess.run(["black", "seating_rules/", "tests/"])
    subprocess.run(["mypy", "seating_rules/"])


def format_code():
    """Format code with black."""
    subprocess.run(["black", "seating_rules/", "tests/"])


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts.py <command>")
        print("Commands: start, test, lint, format-code")
        sys.exit(1)

    command = sys.argv[1].replace("-", "_")
    if hasattr(sys.modules[__name__], command):
        getattr(sys.modules[__name__], command)()
    else:
        print(f"Unknown command: {sys.argv[1]}")
        sys.exit(1)
