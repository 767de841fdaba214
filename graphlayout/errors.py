"""
Layout errors

All errors are fatal for the current layout call. They derive from
ValueError so callers catching ValueError keep working.
"""


class LayoutError(ValueError):
    """Base class for every layout failure"""


class InvalidGraph(LayoutError):
    """Graph has the wrong directedness or shape for the algorithm"""


class NoRoot(LayoutError):
    """Tree algorithm given a rootless or cyclic structure"""


class InvalidWeight(LayoutError):
    """Non-numeric, missing or zero leaf weights"""


class InvalidOption(LayoutError):
    """Unrecognized or mutually inconsistent options"""


class MissingLevel(LayoutError):
    """Explicit ordering references a category that is not present"""


class UnknownLayout(LayoutError):
    """Layout name or object cannot be resolved to an algorithm"""
