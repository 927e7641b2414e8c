import warnings

import pytest
import torch
from tensor.debug import find_nonfinite, check_finite, bitwise_equal
from tensor.dtypes import resolve_dtype, as_real_matrix, common_float_dtype, cast_for_softmax, restore_dtype


def test_resolve_dtype():
    assert resolve_dtype("float64") is torch.float64
    with pytest.raises(ValueError, match="Available"):
        resolve_dtype("int8")


def test_as_real_matrix_promotes_and_rejects_complex():
    x = as_real_matrix([[1, 2], [3, 4]])
    assert x.dtype == torch.get_default_dtype()
    y = as_real_matrix([[True, False]], dtype=torch.float64)
    assert y.dtype == torch.float64 and y.tolist() == [[1.0, 0.0]]
    with pytest.raises(TypeError):
        as_real_matrix(torch.ones(2, 2, dtype=torch.complex64))


def test_common_float_dtype_and_casts():
    a = torch.zeros(1, dtype=torch.float32)
    b = torch.zeros(1, dtype=torch.float64)
    assert common_float_dtype(a, b) == torch.float64
    h = torch.zeros(2, dtype=torch.bfloat16)
    assert cast_for_softmax(h).dtype == torch.float32
    assert cast_for_softmax(b) is b
    assert restore_dtype(cast_for_softmax(h), h).dtype == torch.bfloat16


def test_find_and_check_finite():
    tensors = {"ok": torch.ones(2, 2), "bad": torch.tensor([[float("inf")]])}
    assert find_nonfinite(tensors) == ["bad"]
    with pytest.warns(RuntimeWarning, match="bad"):
        check_finite(tensors)
    with pytest.raises(RuntimeError):
        check_finite(tensors, throw=True)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert check_finite({"ok": torch.zeros(3)}) == []


def test_bitwise_equal():
    x = torch.tensor([[0.1, 0.2]])
    assert bitwise_equal(x, x.clone())
    assert not bitwise_equal(x, x + 1e-7)
    assert not bitwise_equal(x, x.double())
