"""graphseg — Felzenszwalb–Huttenlocher graph-based image segmentation."""

__version__ = "0.1.0"
