"""
CLI Constants

Command names, defaults and help text for the placekit command line.
"""


class CLICommands:
    """Command names."""

    ENCODE = "encode"
    DECODE = "decode"
    VALIDATE = "validate"
    NORMALIZE = "normalize"
    NEIGHBORS = "neighbors"
    DISTANCE = "distance"
    BOUNDARY = "boundary"
    POLYFILL = "polyfill"
    LOOKUP = "lookup"
    DATASETS = "datasets"


class CLIDefaults:
    """Exit codes and defaults."""

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INVALID = 2
    DEFAULT_K = 1


class CLIHelp:
    """Help text."""

    APP_NAME = "placekit"
    APP_HELP = "Encode, validate and query placekey identifiers."
    APP_STYLE = "rich"
    VERSION_TEXT = "placekit {version}"

    ENCODE_HELP = "Encode a coordinate (or an H3 cell with --h3) as a placekey."
    DECODE_HELP = "Decode a placekey to its cell center and H3 cell."
    VALIDATE_HELP = "Check that placekeys are well formed. Exits 2 if any is invalid."
    NORMALIZE_HELP = "Repair placekeys in the malformed shapes the API is known to emit."
    NEIGHBORS_HELP = "List the placekeys within K grid steps, the input included."
    DISTANCE_HELP = "Great-circle distance in meters between two placekeys."
    BOUNDARY_HELP = "Show the center, boundary and GeoJSON of a placekey's hexagon."
    POLYFILL_HELP = "Cover a WKT or GeoJSON polygon (text or file path) with placekeys."
    LOOKUP_HELP = "Resolve coordinates or an address through the placekey API."
    DATASETS_HELP = "List the free datasets published by the placekey API."
