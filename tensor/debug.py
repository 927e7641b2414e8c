import warnings

import torch


def find_nonfinite(tensors: dict[str, torch.Tensor]) -> list[str]:
    """Return the names of tensors holding any NaN/Inf, in insertion order."""
    return [name for name, t in tensors.items() if isinstance(t, torch.Tensor) and not torch.isfinite(t).all()]


def check_finite(tensors: dict[str, torch.Tensor], *, throw: bool = False) -> list[str]:
    """Report NaN/Inf in the given tensors without modifying them.

    If `throw` is True, raises RuntimeError on detection; otherwise warns.
    """
    bad = find_nonfinite(tensors)
    for name in bad:
        t = tensors[name]
        msg = f"NaN/Inf detected in {name}: shape={tuple(t.shape)} dtype={t.dtype}"
        if throw:
            raise RuntimeError(msg)
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
    return bad


def bitwise_equal(a: torch.Tensor, b: torch.Tensor) -> bool:
    if a.dtype != b.dtype or a.shape != b.shape or a.device != b.device:
        return False
    if a.dtype.is_floating_point:
        return torch.equal(a.contiguous().view(torch.uint8), b.contiguous().view(torch.uint8))
    return torch.equal(a, b)
