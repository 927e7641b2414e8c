import math
from typing import Any

import torch

from tensor.dtypes import as_real_matrix, common_float_dtype, cast_for_softmax
from tensor.numerics import stable_softmax
from tensor.shape import assert_attention_shapes


def compute_attention_scores(q: torch.Tensor, k: torch.Tensor) -> torch.Tensor:
    # q: (n_q, d_k), k: (n_k, d_k) -> scores: (n_q, n_k)
    d_k = q.shape[-1]
    return torch.matmul(q, k.transpose(-2, -1)) * (1.0 / math.sqrt(d_k))


def compute_attention_probs(q: torch.Tensor, k: torch.Tensor) -> torch.Tensor:
    scores = compute_attention_scores(q, k)
    return stable_softmax(scores, dim=-1)


def apply_attention_probs(v: torch.Tensor, probs: torch.Tensor) -> torch.Tensor:
    # v: (n_k, d_v), probs: (n_q, n_k) -> out: (n_q, d_v)
    return torch.matmul(probs, v)


def attention(query: Any, key: Any, value: Any, *, dtype: torch.dtype | None = None) -> tuple[torch.Tensor, torch.Tensor]:
    """Single-head scaled dot-product attention.

    Args:
        query: (n_q, d_k) matrix.
        key: (n_k, d_k) matrix.
        value: (n_k, d_v) matrix.
        dtype: optional floating dtype to compute and return in; defaults to
            the promoted dtype of the three inputs. float16/bfloat16 are
            computed and returned as float32.

    Returns:
        (output, weights) with shapes (n_q, d_v) and (n_q, n_k). Every weight
        row sums to 1, so each output row is a convex combination of the value
        rows.

    Raises:
        ShapeMismatch: if query/key dims differ, key/value row counts differ,
            any input is not 2D, or any dimension is zero. Checked before any
            arithmetic. Ragged nested lists also raise it.
        TypeError: for complex inputs.
    """
    q = as_real_matrix(query, dtype, name="query")
    k = as_real_matrix(key, dtype, name="key")
    v = as_real_matrix(value, dtype, name="value")
    assert_attention_shapes(q, k, v)

    target = dtype if dtype is not None else common_float_dtype(q, k, v)
    # half precision is computed and returned in float32
    q, k, v = (cast_for_softmax(t.to(dtype=target)) for t in (q, k, v))

    probs = compute_attention_probs(q, k)
    out = apply_attention_probs(v, probs)
    return out, probs
