"""Constants for family tree parsing, colouring and path descriptions."""

# Relationship type tags
PARENT_CHILD = "parent-child"
SPOUSE = "spouse"
BETROTHED = "betrothed"
PARTNER_TYPES = (SPOUSE, BETROTHED)
RELATIONSHIP_TYPES = (PARENT_CHILD, SPOUSE, BETROTHED)

# Enumerations accepted by the loader
GENDERS = ("male", "female")
PERSON_STATUSES = ("alive", "deceased", "imprisoned", "unknown")
HOUSE_STATUSES = ("active", "extinct")

# Query limits
MAX_SEARCH_RESULTS = 10
DEFAULT_MAX_DEPTH = 10
NOT_CONNECTED = -1

# Reference palette - takes precedence over a house record's own color
HOUSE_COLORS = {
    "stark": "#5c7689",
    "lannister": "#c9a227",
    "targaryen": "#a31621",
    "baratheon": "#1a1a1a",
    "greyjoy": "#2d3436",
    "tyrell": "#27ae60",
    "martell": "#e67e22",
    "arryn": "#3498db",
    "tully": "#16a085",
    "bolton": "#8e44ad",
    "frey": "#7f8c8d",
    "mormont": "#2c3e50",
    "tarly": "#8b4513",
    "tarth": "#9b59b6",
    "hightower": "#4a5568",
    "velaryon": "#0ea5e9",
    "strong": "#78350f",
}
NEUTRAL_COLOR = "#6b7280"
DECEASED_COLOR = "rgba(107, 114, 128, 0.6)"

STATUS_COLORS = {
    "alive": "#27ae60",
    "deceased": "#7f8c8d",
    "imprisoned": "#d35400",
    "unknown": "#8e44ad",
}

STATUS_LABELS = {
    "alive": "Alive",
    "deceased": "Deceased",
    "imprisoned": "Imprisoned",
    "unknown": "Unknown",
}

# Edge label -> phrase used in path descriptions
RELATION_PHRASES = {
    "parent": "parent of",
    "child": "child of",
    SPOUSE: "married to",
    BETROTHED: "betrothed to",
}
DEFAULT_RELATION_PHRASE = "related to"
SAME_PERSON_DESCRIPTION = "Same person"
NO_CONNECTION_DESCRIPTION = "No connection found"
