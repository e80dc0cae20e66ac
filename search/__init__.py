"""Search, grouping and viewer navigation over merged listings."""

from .prober import AdjacentPageProber, ProbeResult
from .service import LeasingDataService
from .viewer import ImageViewer, MissingImageError

__all__ = [
    "AdjacentPageProber",
    "ImageViewer",
    "LeasingDataService",
    "MissingImageError",
    "ProbeResult",
]
