"""Evaluation of novelty detection in data streams"""
from .confusion import DynamicConfusionMatrix

__all__ = [
    "DynamicConfusionMatrix",
]
