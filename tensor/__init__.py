from .numerics import stable_softmax, stable_softmax_with_logsumexp, entropy_from_logits
from .shape import ShapeMismatch, assert_matrix, assert_attention_shapes, assert_nonempty_dim
from .dtypes import resolve_dtype, as_real_matrix, common_float_dtype, cast_for_softmax, restore_dtype
from .debug import find_nonfinite, check_finite, bitwise_equal

__all__ = [
    "stable_softmax",
    "stable_softmax_with_logsumexp",
    "entropy_from_logits",
    "ShapeMismatch",
    "assert_matrix",
    "assert_attention_shapes",
    "assert_nonempty_dim",
    "resolve_dtype",
    "as_real_matrix",
    "common_float_dtype",
    "cast_for_softmax",
    "restore_dtype",
    "find_nonfinite",
    "check_finite",
    "bitwise_equal",
]
