"""Database models."""

from evaluaciones.models.evaluation import Evaluation

__all__ = ["Evaluation"]
