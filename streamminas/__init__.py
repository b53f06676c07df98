"""
StreamMINAS is a Python library for multiclass novelty detection in data streams.
It implements the MINAS framework: instances that cannot be explained by the known concepts are buffered,
periodically clustered, and the resulting clusters are either attached to a known (or sleeping) concept
or declared as novelty patterns.
"""
from . import clustering, decisionrule, exceptions, metrics, model, utils
from .__version__ import __version__ # noqa: F401

__all__ = [
    "clustering",
    "decisionrule",
    "exceptions",
    "metrics",
    "model",
    "utils",
]
