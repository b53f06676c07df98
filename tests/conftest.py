"""
Shared fixtures for the StreamMINAS test-suite.

Provides factories for:
- Instances with sequential timestamps
- Microclusters built from raw points
"""

import itertools

import pytest

from streamminas.utils.data_structure import Category, Instance, MicroCluster


@pytest.fixture
def make_instances():
    """Build instances from points, with consecutive timestamps starting at `start`."""
    def _make(points, label=None, start=1):
        return [Instance(point, label, timestamp) for timestamp, point in zip(itertools.count(start), points)]
    return _make


@pytest.fixture
def make_cluster(make_instances):
    """Build a microcluster from points."""
    def _make(points, label=None, category=Category.KNOWN, start=1):
        return MicroCluster(make_instances(points, label, start), label=label, category=category)
    return _make
