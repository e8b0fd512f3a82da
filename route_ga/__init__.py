"""
Genetic-algorithm optimizer for closed-loop routes over 2D locations.
"""

__all__ = [
    "data",
    "evaluation",
    "evolutionary",
    "genetics",
    "rng",
]
