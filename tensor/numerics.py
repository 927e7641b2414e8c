import torch

from .dtypes import cast_for_softmax, restore_dtype
from .shape import assert_nonempty_dim


def stable_softmax(x: torch.Tensor, dim: int = -1) -> torch.Tensor:
    """Softmax along `dim` with the row maximum subtracted before exp().

    The largest exponentiated value per row is exactly 1, so large scores
    cannot overflow. Non-finite inputs are not guarded and propagate.
    """
    assert_nonempty_dim(x, dim, name="scores")
    x_float = cast_for_softmax(x)
    x_max = x_float.amax(dim=dim, keepdim=True)
    e = torch.exp(x_float - x_max)
    out = e / e.sum(dim=dim, keepdim=True)
    return restore_dtype(out, x)


def stable_softmax_with_logsumexp(x: torch.Tensor, dim: int = -1):
    assert_nonempty_dim(x, dim, name="scores")
    x_float = cast_for_softmax(x)
    x_max = x_float.amax(dim=dim, keepdim=True)
    logZ = x_max + torch.log(torch.exp(x_float - x_max).sum(dim=dim, keepdim=True))
    probs = torch.exp(x_float - logZ)
    return restore_dtype(probs, x), restore_dtype(logZ.squeeze(dim), x)


def entropy_from_logits(logits: torch.Tensor, dim: int = -1) -> torch.Tensor:
    # H = logZ - sum(p * x); shifting by the row max keeps both terms small
    x = cast_for_softmax(logits)
    shifted = x - x.amax(dim=dim, keepdim=True)
    probs, logZ = stable_softmax_with_logsumexp(shifted, dim=dim)
    ent = logZ - (probs * shifted).sum(dim=dim)
    return restore_dtype(ent, logits)
