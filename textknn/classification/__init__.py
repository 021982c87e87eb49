"""
Classification module for TextKNN.
"""

from .base import Classifier
from .knn_classifier import KNearestNeighborClassifier, TrainedModel

__all__ = [
    "Classifier",
    "KNearestNeighborClassifier",
    "TrainedModel",
]
