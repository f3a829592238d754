"""Lineage Explorer Server - FastMCP server for exploring noble house genealogies.

This package provides an MCP server over a houses/persons/relationships
dataset: relationship lookups, house membership, search, shortest
relational paths and filtered family tree forests.

Usage:
    lineage-server --data-file /path/to/complete_lineage.json
    FAMILY_TREE_FILE=/path/to/complete_lineage.json python -m lineage_server
"""

from fastmcp import FastMCP

from .mcp_resources import register_resources
from .mcp_tools import register_tools
from .parsing import load_family_tree
from .state import configure
from .telemetry import initialize_tracing

# Initialize tracing FIRST (before creating server)
# This is a no-op if PHOENIX_ENABLED is not set to 'true'
initialize_tracing()

# Initialize FastMCP server
mcp = FastMCP("Lineage Explorer Server")

# Register tools and resources
register_tools(mcp)
register_resources(mcp)

_initialized = False


def initialize():
    """Initialize the server: configure from env vars and load the family tree.

    Called automatically on first use or can be called explicitly.
    Safe to call multiple times.
    """
    global _initialized
    if _initialized:
        return
    configure()
    load_family_tree()
    _initialized = True


__all__ = ["mcp", "initialize"]
