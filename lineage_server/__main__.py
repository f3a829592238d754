"""Entry point for running the Lineage server as a module.

Usage:
    python -m lineage_server --data-file /path/to/complete_lineage.json
    lineage-server --data-file /path/to/complete_lineage.json
"""

import argparse
import os


def main():
    """Main entry point for the Lineage MCP server."""
    parser = argparse.ArgumentParser(
        description="Lineage MCP Server - Explore house genealogies via MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lineage-server --data-file ~/complete_lineage.json
  lineage-server -f ~/complete_lineage.json --home-person jon_snow

Environment variables:
  FAMILY_TREE_FILE            Path to family tree JSON file
  FAMILY_TREE_HOME_PERSON_ID  ID of home person (default: auto-detect)
""",
    )
    parser.add_argument(
        "--data-file",
        "-f",
        metavar="PATH",
        help="Path to family tree JSON file (or set FAMILY_TREE_FILE env var)",
    )
    parser.add_argument(
        "--home-person",
        "-p",
        metavar="ID",
        help="ID of home person, e.g. jon_snow (default: auto-detect)",
    )
    args = parser.parse_args()

    # CLI args override env vars
    if args.data_file:
        os.environ["FAMILY_TREE_FILE"] = args.data_file
    if args.home_person:
        os.environ["FAMILY_TREE_HOME_PERSON_ID"] = args.home_person

    # Import and initialize AFTER setting env vars
    from . import initialize, mcp

    initialize()
    mcp.run()


if __name__ == "__main__":
    main()
