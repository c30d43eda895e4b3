"""Tests for the msisjax.config module."""

import jax
import jax.numpy as jnp
import pytest

from msisjax.coefficients import coefficients_from_arrays
from msisjax.config import get_dtype, set_dtype
from msisjax.nrlmsise00 import ApCoef, make_input
from msisjax.solar_activity import constant_solar_activity

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float32 before and after each test."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float32)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestDtypeSwitchingOutputs:
    """Verify that constructed values follow the configured dtype."""

    def test_make_input_dtype_float64(self):
        set_dtype(jnp.float64)
        inp = make_input(172, 29000.0, 400.0, 60.0, -70.0)
        assert inp.alt.dtype == jnp.float64
        assert inp.lst.dtype == jnp.float64

    def test_make_input_dtype_float32(self):
        inp = make_input(172, 29000.0, 400.0, 60.0, -70.0)
        assert inp.alt.dtype == jnp.float32

    def test_ap_coef_dtype_float64(self):
        set_dtype(jnp.float64)
        assert ApCoef.constant(4.0).ap.dtype == jnp.float64

    def test_coefficients_dtype_float64(self, synthetic_arrays):
        set_dtype(jnp.float64)
        c = coefficients_from_arrays(**synthetic_arrays)
        assert c.pd.dtype == jnp.float64

    def test_solar_activity_dtype_float64(self):
        set_dtype(jnp.float64)
        activity = constant_solar_activity()
        assert activity.ap.dtype == jnp.float64
