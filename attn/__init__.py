from .reference import (
    attention,
    compute_attention_scores,
    compute_attention_probs,
    apply_attention_probs,
)
from tensor.shape import ShapeMismatch

__all__ = [
    "attention",
    "compute_attention_scores",
    "compute_attention_probs",
    "apply_attention_probs",
    "ShapeMismatch",
]
