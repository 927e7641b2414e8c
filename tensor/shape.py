import torch


class ShapeMismatch(ValueError):
    """Raised when query/key/value matrices violate the attention shape contract."""


def assert_matrix(x: torch.Tensor, name: str = "tensor"):
    if x.ndim != 2:
        raise ShapeMismatch(f"{name} must be a 2D matrix, got shape {tuple(x.shape)}")
    if x.size(0) == 0 or x.size(1) == 0:
        raise ShapeMismatch(f"{name} must have at least one row and one column, got shape {tuple(x.shape)}")


def assert_attention_shapes(q: torch.Tensor, k: torch.Tensor, v: torch.Tensor) -> tuple[int, int, int, int]:
    """Validate (n_q, d_k), (n_k, d_k), (n_k, d_v) and return (n_q, n_k, d_k, d_v).

    d_v is independent of d_k; only the shared key dimension and the key/value
    row counts are tied together.
    """
    assert_matrix(q, "query")
    assert_matrix(k, "key")
    assert_matrix(v, "value")
    n_q, d_k = q.shape
    n_k, d_k_key = k.shape
    if d_k != d_k_key:
        raise ShapeMismatch(f"query dim {d_k} != key dim {d_k_key} (query {tuple(q.shape)}, key {tuple(k.shape)})")
    if v.size(0) != n_k:
        raise ShapeMismatch(f"key rows {n_k} != value rows {v.size(0)} (key {tuple(k.shape)}, value {tuple(v.shape)})")
    return int(n_q), int(n_k), int(d_k), int(v.size(1))


def assert_nonempty_dim(x: torch.Tensor, dim: int = -1, name: str = "tensor"):
    if x.ndim == 0:
        raise ShapeMismatch(f"{name} must have at least one dimension")
    if x.size(dim) == 0:
        raise ShapeMismatch(f"{name} has an empty dimension {dim}: shape {tuple(x.shape)}")
