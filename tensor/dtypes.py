from typing import Any

import torch

from .shape import ShapeMismatch


_DTYPES = {
    "float32": torch.float32,
    "float64": torch.float64,
    "float16": torch.float16,
    "bfloat16": torch.bfloat16,
}

_HALF = (torch.float16, torch.bfloat16)


def resolve_dtype(name: str) -> torch.dtype:
    try:
        return _DTYPES[name]
    except KeyError:
        raise ValueError(f"Unknown dtype '{name}'. Available: {', '.join(_DTYPES)}") from None


def cast_for_softmax(x: torch.Tensor) -> torch.Tensor:
    # half precision underflows in exp(); normalize in float32
    return x.float() if x.dtype in _HALF else x


def restore_dtype(x: torch.Tensor, like: torch.Tensor) -> torch.Tensor:
    return x.to(dtype=like.dtype)


def as_real_matrix(x: Any, dtype: torch.dtype | None = None, *, name: str = "tensor") -> torch.Tensor:
    """Coerce tensors, nested lists or scalars to a real floating tensor.

    Bool/int inputs become the default float dtype; complex inputs are rejected.
    Ragged nested lists raise ShapeMismatch.
    """
    try:
        t = torch.as_tensor(x)
    except ValueError as e:
        raise ShapeMismatch(f"{name} is not a rectangular matrix: {e}") from e
    if t.is_complex():
        raise TypeError(f"expected real-valued input, got {t.dtype}")
    if dtype is not None:
        return t.to(dtype=dtype)
    if not t.dtype.is_floating_point:
        t = t.to(dtype=torch.get_default_dtype())
    return t


def common_float_dtype(*tensors: torch.Tensor) -> torch.dtype:
    if not tensors:
        return torch.get_default_dtype()
    d = tensors[0].dtype
    for t in tensors[1:]:
        d = torch.promote_types(d, t.dtype)
    return d
