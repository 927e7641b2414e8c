import pytest
import torch
from tensor.shape import ShapeMismatch, assert_matrix, assert_attention_shapes


def test_assert_attention_shapes_returns_dims():
    dims = assert_attention_shapes(torch.zeros(2, 4), torch.zeros(3, 4), torch.zeros(3, 5))
    assert dims == (2, 3, 4, 5)


def test_key_dim_mismatch():
    with pytest.raises(ShapeMismatch, match="query dim"):
        assert_attention_shapes(torch.zeros(2, 3), torch.zeros(3, 4), torch.zeros(3, 5))


def test_key_value_rows_mismatch():
    with pytest.raises(ShapeMismatch, match="value rows"):
        assert_attention_shapes(torch.zeros(2, 4), torch.zeros(3, 4), torch.zeros(4, 5))


@pytest.mark.parametrize("shape", [(0, 4), (3, 0), (4,), (1, 2, 3)])
def test_assert_matrix_rejects(shape):
    with pytest.raises(ShapeMismatch):
        assert_matrix(torch.zeros(*shape), "query")


def test_shape_mismatch_is_value_error():
    with pytest.raises(ValueError):
        assert_matrix(torch.zeros(0, 1))
