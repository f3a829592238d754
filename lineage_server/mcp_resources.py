"""MCP resource definitions for the Lineage explorer server."""

from .core import _get_house, _get_person, _get_statistics, _list_houses


def register_resources(mcp):
    """Register all MCP resources with the server."""

    @mcp.resource("lineage://person/{id}")
    def resource_person(id: str) -> str:
        """Get person record by ID."""
        person = _get_person(id)
        if person:
            return str(person)
        return f"Person {id} not found"

    @mcp.resource("lineage://house/{id}")
    def resource_house(id: str) -> str:
        """Get house record by ID."""
        house = _get_house(id)
        if house:
            return str(house)
        return f"House {id} not found"

    @mcp.resource("lineage://houses")
    def resource_houses() -> str:
        """Get list of all houses."""
        lines = []
        for h in _list_houses():
            status = h.get("status") or "active"
            lines.append(f"{h['id']}: {h['name']} ({h['region']}, {status})")
        return "\n".join(lines)

    @mcp.resource("lineage://stats")
    def resource_stats() -> str:
        """Get tree statistics."""
        return str(_get_statistics())
