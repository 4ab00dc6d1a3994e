"""Monitor the MWRA Biobot page and extract wastewater sample series."""

__version__ = "0.1.0"
