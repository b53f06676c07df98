"""Shared utility classes and functions"""
from . import cluster_utils
from .data_structure import Category, Classification, Instance, Labeling, MicroCluster, Point, TemporaryMemory

__all__ = [
    "cluster_utils",
    "Category",
    "Classification",
    "Instance",
    "Labeling",
    "MicroCluster",
    "Point",
    "TemporaryMemory",
]
