"""Novelty detection models"""
from .config import MinasConfiguration
from .engine import initialize_model, process
from .minas import Minas
from .state import MinasModel

__all__ = [
    "Minas",
    "MinasConfiguration",
    "MinasModel",
    "initialize_model",
    "process",
]
