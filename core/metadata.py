"""
Wayfinder Core Metadata
-----------------------
Identity layer shared by the API root, the health report and packaging.
"""

__project__ = "Wayfinder"
__version__ = "1.0.0"

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "description": (
        "Indoor wayfinding service: places, localized names, curated "
        "dashboards and step-by-step directions over a connection graph."
    ),
}


def get_metadata() -> dict:
    """Return current system metadata as a dict."""
    return dict(CORE_METADATA)
