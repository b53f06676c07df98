"""Clustering algorithms producing microclusters from a batch of instances"""
from .base import ClusteringAlgorithm
from .kmeans import KMeans
from .kmeanspp import KMeansPlusPlus
from .clustream import CluStream

__all__ = [
    "ClusteringAlgorithm",
    "KMeans",
    "KMeansPlusPlus",
    "CluStream",
]
