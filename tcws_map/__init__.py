"""Tropical cyclone wind signal map formatter."""

__version__ = "0.1.0"

from tcws_map.formatter import SignalsFormatter  # noqa: E402

__all__ = ["SignalsFormatter", "__version__"]
