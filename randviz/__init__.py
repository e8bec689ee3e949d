"""
randviz: see what your random bytes look like.

Serves byte streams from a linear congruential generator, the host random
device and Python's ``random`` module, and renders them as bit grids,
histograms, scatter plots and color grids next to mean, standard deviation
and Shannon entropy.
"""

__version__ = "0.1.0"
__author__ = "Amenti Labs"

from randviz.accumulator import StatisticsAccumulator, SummaryStatistics
from randviz.errors import InvalidArgument, NetworkError, RandvizError, SourceReadError
from randviz.service import ByteService
from randviz.sources import SOURCE_NAMES, ByteSource, create_source
from randviz.sources.lcg import LCGGenerator

__all__ = [
    "ByteService",
    "ByteSource",
    "InvalidArgument",
    "LCGGenerator",
    "NetworkError",
    "RandvizError",
    "SOURCE_NAMES",
    "SourceReadError",
    "StatisticsAccumulator",
    "SummaryStatistics",
    "create_source",
    "__version__",
]
