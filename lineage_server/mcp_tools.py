"""MCP tool definitions for the Lineage explorer server."""

from .core import (
    _build_forest,
    _find_path,
    _fuzzy_search_persons,
    _get_ancestors,
    _get_children,
    _get_connection_degree,
    _get_descendants,
    _get_home_person,
    _get_house,
    _get_house_color,
    _get_house_members,
    _get_parents,
    _get_partners,
    _get_person,
    _get_person_relationships,
    _get_siblings,
    _get_spouses,
    _get_statistics,
    _list_houses,
    _reload_family_tree,
    _search_persons,
)


def register_tools(mcp):
    """Register all MCP tools with the server."""

    # ============== CONTEXT TOOLS (3) ==============

    @mcp.tool()
    def get_home_person() -> dict | None:
        """
        Get the home person - the most connected person in the tree, or the
        one configured with FAMILY_TREE_HOME_PERSON_ID.

        Use this as a starting point when no person is specified.

        Returns:
            Full person record for the home person
        """
        return _get_home_person()

    @mcp.tool()
    def get_statistics() -> dict:
        """
        Get statistics about the loaded family tree.

        Returns:
            Counts by status, gender, house and relationship type, plus
            secret relationships and dangling references
        """
        return _get_statistics()

    @mcp.tool()
    def reload_family_tree() -> dict:
        """
        Re-read the family tree file and rebuild every index.

        Returns:
            New snapshot generation and record counts
        """
        return _reload_family_tree()

    # ============== LOOKUP TOOLS (4) ==============

    @mcp.tool()
    def get_person(person_id: str) -> dict | None:
        """
        Get a person's full record, including display colour and status label.

        Args:
            person_id: The person ID (e.g., "jon_snow")

        Returns:
            Person record, or None if not found
        """
        return _get_person(person_id)

    @mcp.tool()
    def get_house(house_id: str) -> dict | None:
        """
        Get a house record with its resolved colour and member count.

        Args:
            house_id: The house ID (e.g., "stark")
        """
        return _get_house(house_id)

    @mcp.tool()
    def list_houses() -> list[dict]:
        """List all houses in dataset order."""
        return _list_houses()

    @mcp.tool()
    def get_house_color(house_id: str | None = None) -> str:
        """
        Resolve the display colour for a house.

        The reference palette wins over the house record's own colour; unknown
        or missing houses get neutral gray.
        """
        return _get_house_color(house_id)

    # ============== NAVIGATION TOOLS (7) ==============

    @mcp.tool()
    def get_parents(person_id: str) -> list[dict]:
        """
        Get the parents of a person.

        Args:
            person_id: The person ID

        Returns:
            List of parents with summary info (empty if none are known)
        """
        return _get_parents(person_id)

    @mcp.tool()
    def get_children(person_id: str) -> list[dict]:
        """
        Get all children of a person.

        Args:
            person_id: The person ID

        Returns:
            List of children with summary info
        """
        return _get_children(person_id)

    @mcp.tool()
    def get_spouses(person_id: str) -> list[dict]:
        """
        Get the spouses of a person (marriages only, not betrothals).

        Args:
            person_id: The person ID
        """
        return _get_spouses(person_id)

    @mcp.tool()
    def get_partners(person_id: str) -> list[dict]:
        """
        Get spouses and betrothed partners of a person.

        Args:
            person_id: The person ID
        """
        return _get_partners(person_id)

    @mcp.tool()
    def get_siblings(person_id: str) -> list[dict]:
        """
        Get full and half siblings of a person (anyone sharing a parent).

        Args:
            person_id: The person ID
        """
        return _get_siblings(person_id)

    @mcp.tool()
    def get_house_members(house_id: str) -> list[dict]:
        """
        Get everyone affiliated with a house by birth, marriage, true
        parentage or upbringing.

        Args:
            house_id: The house ID
        """
        return _get_house_members(house_id)

    @mcp.tool()
    def get_person_relationships(person_id: str, include_secrets: bool = True) -> list[dict]:
        """
        Get every relationship record involving a person.

        Args:
            person_id: The person ID
            include_secrets: Include relationships flagged secret (default True)
        """
        return _get_person_relationships(person_id, include_secrets)

    # ============== SEARCH TOOLS (2) ==============

    @mcp.tool()
    def search_persons(query: str, max_results: int = 10) -> list[dict]:
        """
        Search for persons by name or alias (case-insensitive partial match).

        Args:
            query: Text to look for
            max_results: Maximum results to return (default 10, max 10)

        Returns:
            Matches in dataset order
        """
        return _search_persons(query, max_results)

    @mcp.tool()
    def fuzzy_search_persons(query: str, threshold: int = 70, max_results: int = 10) -> list[dict]:
        """
        Search names and aliases tolerating typos and spelling variants.

        Combines substring, fuzzy and phonetic matching.

        Args:
            query: Name to look for (e.g., "Tyrion Lanister")
            threshold: Minimum fuzzy match score 0-100 (default 70)
            max_results: Maximum results to return (default 10)

        Returns:
            Matches with match_score, best first
        """
        return _fuzzy_search_persons(query, threshold, max_results)

    # ============== GRAPH TOOLS (5) ==============

    @mcp.tool()
    def find_path(person1_id: str, person2_id: str) -> dict:
        """
        Find the shortest chain of relationships connecting two persons.

        Args:
            person1_id: Person to start from
            person2_id: Person to reach

        Returns:
            Dictionary with found, degree, steps and a readable description
            such as "Eddard Stark → parent of → Robb Stark"
        """
        return _find_path(person1_id, person2_id)

    @mcp.tool()
    def get_connection_degree(person1_id: str, person2_id: str) -> int:
        """
        Count relationship hops between two persons (-1 if not connected).
        """
        return _get_connection_degree(person1_id, person2_id)

    @mcp.tool()
    def get_ancestors(person_id: str, max_depth: int = 10) -> list[dict]:
        """
        Get all ancestors of a person through parent-child links.

        Args:
            person_id: The person ID
            max_depth: Generations to go back (default 10, max 10)
        """
        return _get_ancestors(person_id, max_depth)

    @mcp.tool()
    def get_descendants(person_id: str, max_depth: int = 10) -> list[dict]:
        """
        Get all descendants of a person through parent-child links.

        Args:
            person_id: The person ID
            max_depth: Generations to go down (default 10, max 10)
        """
        return _get_descendants(person_id, max_depth)

    @mcp.tool()
    def build_forest(
        selected_houses: list[str],
        show_deceased: bool = True,
        show_secrets: bool = True,
        show_bastards: bool = True,
    ) -> dict:
        """
        Build the family tree forest for the selected houses.

        Each node carries the person, their first partner and their visible
        children. Status "no_selection" means no house was chosen; "empty"
        means the filters hide everyone.

        Args:
            selected_houses: House IDs to show (by birth house)
            show_deceased: Include deceased persons
            show_secrets: Include relationships flagged secret
            show_bastards: Include persons flagged as bastards
        """
        return _build_forest(selected_houses, show_deceased, show_secrets, show_bastards)
