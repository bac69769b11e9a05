#!/usr/bin/env python3
"""
Export the OpenAPI specification of the Seating Rules API.

The generated JSON can be used for client generation and API testing tools.
"""

import json
import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from seating_rules.main import app


def export_openapi_spec(output_file: str = "openapi.json") -> bool:
    """Export the OpenAPI specification to a JSON file."""
    try:
        openapi_schema = app.openapi()

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(openapi_schema, f, indent=2, ensure_ascii=False)

        print(f"OpenAPI specification exported to: {output_file}")
        print(f"Schema version: {openapi_schema.get('openapi', 'unknown')}")
        print(f"API version: {openapi_schema.get('info', {}).get('version', 'unknown')}")

        paths = openapi_schema.get('paths', {})
        print(f"\nAvailable paths:")
        for path in sorted(paths.keys()):
            methods = list(paths[path].keys())
            print(f"  {path}: {', '.join(method.upper() for method in methods)}")

        return True

    except OSError as e:
        print(f"Failed to write OpenAPI specification: {e}")
        return False


def main():
    """Main function."""
    output_file = sys.argv[1] if len(sys.argv) > 1 else "openapi.json"
    if not export_openapi_spec(output_file):
        sys.exit(1)


if __name__ == "__main__":
    main()
