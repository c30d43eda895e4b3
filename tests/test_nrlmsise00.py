"""Tests for the NRLMSISE-00 model drivers.

Structural properties (units, regimes, purity, JAX transformations) are
checked against synthetic coefficient tables.  Published reference values
(Brodowski's C implementation test output and the ``gtd7d`` total density
table) are checked against the bundled published coefficient tables.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import pytest

from msisjax.coefficients import coefficients_from_arrays
from msisjax.nrlmsise00 import (
    SPECIES,
    ApCoef,
    Flags,
    gtd7,
    gtd7d,
    gts7,
    glatf,
    make_input,
)

# ===========================================================================
# Brodowski C Reference Cases
# ===========================================================================

# Reference values from the Brodowski C implementation of NRLMSISE-00,
# evaluated with the default switches (CGS units, scalar Ap).
# Number densities in cm^-3, total mass density in g/cm^3.
#
# Format: (case_id, doy, sec, alt, g_lat, g_lon, lst, f107a, f107, ap,
#           expected_t, expected_d)
BRODOWSKI_CASES = [
    (
        1,
        172,
        29000.0,
        400.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1250.54, 1241.42],
        [
            6.6651769e05,
            1.1388056e08,
            1.9982109e07,
            4.0227636e05,
            3.5574650e03,
            4.0747135e-15,
            3.4753124e04,
            4.0959133e06,
            2.6672732e04,
        ],
    ),
    (
        2,
        81,
        29000.0,
        400.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1166.75, 1161.71],
        [
            3.4072932e06,
            1.5863334e08,
            1.3911174e07,
            3.2625595e05,
            1.5596182e03,
            5.0018457e-15,
            4.8542085e04,
            4.3809667e06,
            6.9566820e03,
        ],
    ),
    (
        3,
        172,
        75000.0,
        1000.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1239.89, 1239.89],
        [
            1.1237672e05,
            6.9341301e04,
            4.2471052e01,
            1.3227501e-01,
            2.6188484e-05,
            2.7567723e-18,
            2.0167499e04,
            5.7412559e03,
            2.3743942e04,
        ],
    ),
    (
        4,
        172,
        29000.0,
        100.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1027.32, 206.89],
        [
            5.4115544e07,
            1.9188934e11,
            6.1158256e12,
            1.2252011e12,
            6.0232120e10,
            3.5844263e-10,
            1.0598797e07,
            2.6157367e05,
            2.8198794e-42,
        ],
    ),
    (
        5,
        172,
        29000.0,
        400.0,
        0.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1212.40, 1208.14],
        [
            1.8511225e06,
            1.4765548e08,
            1.5793562e07,
            2.6337950e05,
            1.5887814e03,
            4.8096302e-15,
            5.8161668e04,
            5.4789845e06,
            1.2644459e03,
        ],
    ),
    (
        6,
        172,
        29000.0,
        400.0,
        60.0,
        0.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1220.15, 1212.71],
        [
            8.6730952e05,
            1.2788618e08,
            1.8225766e07,
            2.9222142e05,
            2.4029624e03,
            4.3558656e-15,
            3.6863892e04,
            3.8972755e06,
            2.6672732e04,
        ],
    ),
    (
        7,
        172,
        29000.0,
        400.0,
        60.0,
        -70.0,
        4.0,
        150.0,
        150.0,
        4.0,
        [1116.39, 1113.00],
        [
            5.7762512e05,
            6.9791387e07,
            1.2368136e07,
            2.4928677e05,
            1.4057387e03,
            2.4706514e-15,
            5.2919856e04,
            1.0698141e06,
            2.6672732e04,
        ],
    ),
    (
        8,
        172,
        29000.0,
        400.0,
        60.0,
        -70.0,
        16.0,
        70.0,
        150.0,
        4.0,
        [1031.25, 1024.85],
        [
            3.7403041e05,
            4.7827201e07,
            5.2403800e06,
            1.7598746e05,
            5.5016488e02,
            1.5718887e-15,
            8.8967757e04,
            1.9797408e06,
            9.1218149e03,
        ],
    ),
    (
        9,
        172,
        29000.0,
        400.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        180.0,
        4.0,
        [1306.05, 1293.37],
        [
            6.7483388e05,
            1.2453153e08,
            2.3690095e07,
            4.9115832e05,
            4.5787811e03,
            4.5644202e-15,
            3.2445948e04,
            5.3708331e06,
            2.6672732e04,
        ],
    ),
    (
        10,
        172,
        29000.0,
        400.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        40.0,
        [1361.87, 1347.39],
        [
            5.5286008e05,
            1.1980413e08,
            3.4957978e07,
            9.3396184e05,
            1.0962548e04,
            4.9745431e-15,
            2.6864279e04,
            4.8899742e06,
            2.8054448e04,
        ],
    ),
    (
        11,
        172,
        29000.0,
        0.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1027.32, 281.46],
        [1.3754876e14, 0.0, 2.0496870e19, 5.4986954e18, 2.4517332e17, 1.2610657e-03, 0.0, 0.0, 0.0],
    ),
    (
        12,
        172,
        29000.0,
        10.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1027.32, 227.42],
        [4.4274426e13, 0.0, 6.5975672e18, 1.7699293e18, 7.8916800e16, 4.0591394e-04, 0.0, 0.0, 0.0],
    ),
    (
        13,
        172,
        29000.0,
        30.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1027.32, 237.44],
        [2.1278288e12, 0.0, 3.1707906e17, 8.5062798e16, 3.7927411e15, 1.9508222e-05, 0.0, 0.0, 0.0],
    ),
    (
        14,
        172,
        29000.0,
        50.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1027.32, 279.56],
        [1.4121835e11, 0.0, 2.1043696e16, 5.6453924e15, 2.5171417e14, 1.2947090e-06, 0.0, 0.0, 0.0],
    ),
    (
        15,
        172,
        29000.0,
        70.0,
        60.0,
        -70.0,
        16.0,
        150.0,
        150.0,
        4.0,
        [1027.32, 219.07],
        [1.2548844e10, 0.0, 1.8745328e15, 4.9230510e14, 2.2396854e13, 1.1476677e-07, 0.0, 0.0, 0.0],
    ),
]


@pytest.mark.parametrize(
    "case_id,doy,sec,alt,g_lat,g_lon,lst,f107a,f107,ap,expected_t,expected_d",
    BRODOWSKI_CASES,
    ids=[f"case_{c[0]}" for c in BRODOWSKI_CASES],
)
def test_gtd7_brodowski(
    reference_coefficients,
    case_id: int,
    doy: int,
    sec: float,
    alt: float,
    g_lat: float,
    g_lon: float,
    lst: float,
    f107a: float,
    f107: float,
    ap: float,
    expected_t: list[float],
    expected_d: list[float],
) -> None:
    """Validate gtd7 against the Brodowski C reference output."""
    inp = make_input(doy, sec, alt, g_lat, g_lon, lst=lst, f107a=f107a, f107=f107, ap=ap)
    out = gtd7(reference_coefficients, inp, Flags())

    for i in range(2):
        assert float(out.t[i]) == pytest.approx(expected_t[i], abs=0.05), (
            f"Case {case_id}: t[{i}] = {float(out.t[i])}, expected {expected_t[i]}"
        )

    for i in range(9):
        actual = float(out.d[i])
        expected = expected_d[i]
        if expected == 0.0:
            assert actual == pytest.approx(0.0, abs=1e-30), (
                f"Case {case_id}: d[{i}] = {actual}, expected 0.0"
            )
        elif abs(expected) < 1e-30:
            # Values near the float64 underflow limit: loose absolute tolerance
            assert actual == pytest.approx(expected, abs=abs(expected) * 0.1), (
                f"Case {case_id}: d[{i}] = {actual}, expected ~{expected}"
            )
        else:
            assert actual == pytest.approx(expected, rel=1e-5), (
                f"Case {case_id}: d[{i}] = {actual}, expected {expected}"
            )


# Brodowski cases 16 and 17: Ap history of 100 in every slot, switch 9 = -1.
#
# Format: (case_id, alt, expected_t, expected_d)
BRODOWSKI_AP_HISTORY_CASES = [
    (
        16,
        400.0,
        [1426.412, 1408.608],
        [
            5.196477e05,
            1.274494e08,
            4.850450e07,
            1.720838e06,
            2.354487e04,
            5.881940e-15,
            2.500078e04,
            6.279210e06,
            2.667273e04,
        ],
    ),
    (
        17,
        100.0,
        [1027.318, 193.4071],
        [
            4.260860e07,
            1.241342e11,
            4.929562e12,
            1.048407e12,
            4.993465e10,
            2.914304e-10,
            8.831229e06,
            2.252516e05,
            2.415246e-42,
        ],
    ),
]


@pytest.mark.parametrize(
    "case_id,alt,expected_t,expected_d",
    BRODOWSKI_AP_HISTORY_CASES,
    ids=[f"case_{c[0]}" for c in BRODOWSKI_AP_HISTORY_CASES],
)
def test_gtd7_brodowski_ap_history(reference_coefficients, case_id, alt, expected_t, expected_d) -> None:
    ap_a = ApCoef([100.0] * 7)
    inp = make_input(172, 29000.0, alt, 60.0, -70.0, lst=16.0, f107a=150.0, f107=150.0, ap=4.0, ap_a=ap_a)
    out = gtd7(reference_coefficients, inp, Flags().with_switch(9, -1))

    for i in range(2):
        assert float(out.t[i]) == pytest.approx(expected_t[i], abs=0.05), f"Case {case_id}: t[{i}]"
    for i in range(9):
        if abs(expected_d[i]) < 1e-30:
            assert float(out.d[i]) == pytest.approx(expected_d[i], rel=0.1), f"Case {case_id}: d[{i}]"
        else:
            assert float(out.d[i]) == pytest.approx(expected_d[i], rel=1e-5), f"Case {case_id}: d[{i}]"


# Total mass density from gtd7d (g/cm^3), including anomalous oxygen, to
# full double precision.
GTD7D_TOTAL_DENSITY_CASES = [
    (1, 400.0, 4.07542188218729e-15),
    (11, 0.0, 1.26106560865974e-03),
]


@pytest.mark.parametrize(
    "case_id,alt,expected",
    GTD7D_TOTAL_DENSITY_CASES,
    ids=[f"case_{c[0]}" for c in GTD7D_TOTAL_DENSITY_CASES],
)
def test_gtd7d_total_density(reference_coefficients, case_id, alt, expected) -> None:
    inp = make_input(172, 29000.0, alt, 60.0, -70.0, lst=16.0, f107a=150.0, f107=150.0, ap=4.0)
    out = gtd7d(reference_coefficients, inp, Flags())
    assert float(out.d[5]) == pytest.approx(expected, rel=1e-8)


@pytest.mark.parametrize(
    "case_id,doy,sec,alt,g_lat,g_lon,lst,f107a,f107,ap,expected_t,expected_d",
    BRODOWSKI_CASES,
    ids=[f"case_{c[0]}" for c in BRODOWSKI_CASES],
)
def test_gtd7d_brodowski(
    reference_coefficients,
    case_id: int,
    doy: int,
    sec: float,
    alt: float,
    g_lat: float,
    g_lon: float,
    lst: float,
    f107a: float,
    f107: float,
    ap: float,
    expected_t: list[float],
    expected_d: list[float],
) -> None:
    """gtd7d adds anomalous oxygen (16 amu) to the Brodowski total density."""
    inp = make_input(doy, sec, alt, g_lat, g_lon, lst=lst, f107a=f107a, f107=f107, ap=ap)
    out = gtd7d(reference_coefficients, inp, Flags())
    expected = expected_d[5] + 1.66e-24 * 16.0 * expected_d[8]
    assert float(out.d[5]) == pytest.approx(expected, rel=1e-5), f"Case {case_id}: d[5]"


def test_gtd7_extrapolates_below_ground(reference_coefficients) -> None:
    inp = make_input(172, 29000.0, -2.0, 60.0, -70.0, lst=16.0, f107a=150.0, f107=150.0, ap=4.0)
    ground_inp = make_input(172, 29000.0, 0.0, 60.0, -70.0, lst=16.0, f107a=150.0, f107=150.0, ap=4.0)
    out = gtd7(reference_coefficients, inp, Flags())
    ground = gtd7(reference_coefficients, ground_inp, Flags())
    assert float(out.d[2]) == pytest.approx(2.6443e19, rel=1e-3)
    assert float(out.t[1]) == pytest.approx(278.33, abs=0.05)
    assert float(out.d[2]) > float(ground.d[2])


class TestReferenceApHistory:
    """Ap history mode with the published coefficients."""

    def test_history_mode_changes_result(self, reference_coefficients) -> None:
        ap_a = ApCoef([100.0] * 7)
        inp = make_input(172, 29000.0, 400.0, 60.0, -70.0, lst=16.0, ap=4.0, ap_a=ap_a)
        scalar = gtd7(reference_coefficients, inp, Flags())
        history = gtd7(reference_coefficients, inp, Flags().with_switch(9, -1))
        assert float(history.t[0]) != pytest.approx(float(scalar.t[0]), rel=1e-6)

    def test_history_mode_without_history(self, reference_coefficients) -> None:
        """A scalar-only input evaluates in history mode with a zero history."""
        inp = make_input(172, 29000.0, 400.0, 60.0, -70.0, lst=16.0)
        out = gtd7(reference_coefficients, inp, Flags().with_switch(9, -1))
        assert bool(jnp.all(jnp.isfinite(out.d)))
        assert bool(jnp.all(jnp.isfinite(out.t)))


# ===========================================================================
# Structure and units
# ===========================================================================


def _input(alt: float = 400.0, **kwargs):
    return make_input(172, 29000.0, alt, 60.0, -70.0, lst=16.0, **kwargs)


class TestOutputStructure:
    def test_shapes(self, synthetic_coefficients) -> None:
        out = gtd7(synthetic_coefficients, _input(), Flags())
        assert out.d.shape == (9,)
        assert out.t.shape == (2,)

    @pytest.mark.parametrize("alt", [100.0, 250.0, 400.0, 800.0], ids=lambda a: f"{a:g}km")
    def test_thermosphere_positive(self, synthetic_coefficients, alt) -> None:
        out = gtd7(synthetic_coefficients, _input(alt), Flags())
        assert bool(jnp.all(out.d > 0.0))
        assert float(out.t[0]) > 0.0
        assert float(out.t[1]) > 0.0

    def test_exospheric_temperature(self, synthetic_coefficients) -> None:
        """With flat expansions the exospheric temperature is ptm[0] * pt[0]."""
        out = gtd7(synthetic_coefficients, _input(), Flags())
        assert float(out.exospheric_temperature) == pytest.approx(1041.3, rel=1e-12)

    def test_temperature_approaches_exosphere(self, synthetic_coefficients) -> None:
        out = gtd7(synthetic_coefficients, _input(1000.0), Flags())
        assert float(out.local_temperature) == pytest.approx(float(out.exospheric_temperature), rel=1e-3)

    def test_total_density_is_mass_weighted_sum(self, synthetic_coefficients) -> None:
        d = gtd7(synthetic_coefficients, _input(), Flags()).d
        expected = 1.66e-24 * (
            4.0 * d[0] + 16.0 * d[1] + 28.0 * d[2] + 32.0 * d[3] + 40.0 * d[4] + d[6] + 14.0 * d[7]
        )
        assert float(d[5]) == pytest.approx(float(expected), rel=1e-12)

    def test_density_decreases_with_altitude(self, synthetic_coefficients) -> None:
        rho = [float(gtd7d(synthetic_coefficients, _input(a), Flags()).d[5]) for a in (200.0, 400.0, 600.0, 800.0)]
        for lower, upper in zip(rho, rho[1:]):
            assert upper < lower


class TestUnits:
    def test_si_number_densities(self, synthetic_coefficients) -> None:
        cgs = gtd7(synthetic_coefficients, _input(), Flags())
        si = gtd7(synthetic_coefficients, _input(), Flags.si())
        for i in (0, 1, 2, 3, 4, 6, 7, 8):
            assert float(si.d[i]) == pytest.approx(float(cgs.d[i]) * 1.0e6, rel=1e-12)

    @pytest.mark.parametrize("alt", [30.0, 400.0], ids=["lower", "thermosphere"])
    def test_si_mass_density(self, synthetic_coefficients, alt) -> None:
        cgs = gtd7d(synthetic_coefficients, _input(alt), Flags())
        si = gtd7d(synthetic_coefficients, _input(alt), Flags.si())
        assert float(si.d[5]) == pytest.approx(float(cgs.d[5]) * 1.0e3, rel=1e-12)

    def test_temperatures_unit_independent(self, synthetic_coefficients) -> None:
        cgs = gtd7(synthetic_coefficients, _input(), Flags())
        si = gtd7(synthetic_coefficients, _input(), Flags.si())
        assert jnp.allclose(cgs.t, si.t, rtol=1e-12)


class TestSpeciesDensitySwitches:
    def test_switch_per_species(self) -> None:
        switches = {profile.name: profile.density_switch for profile in SPECIES}
        assert switches == {"He": 21, "O": 21, "O2": 21, "Ar": 20, "H": 21, "N": 21}

    def test_argon_follows_switch_20(self, synthetic_arrays) -> None:
        synthetic_arrays["pd"][5, 21] = 0.002
        c = coefficients_from_arrays(**synthetic_arrays)
        inp = _input(f107a=200.0)
        base = gtd7(c, inp, Flags())
        off_20 = gtd7(c, inp, Flags().with_switch(20, 0))
        off_21 = gtd7(c, inp, Flags().with_switch(21, 0))
        assert float(off_20.d[4]) != pytest.approx(float(base.d[4]), rel=1e-6)
        assert float(off_21.d[4]) == pytest.approx(float(base.d[4]), rel=1e-12)
        assert float(off_20.d[0]) == pytest.approx(float(base.d[0]), rel=1e-12)


class TestGtd7d:
    """Tests for gtd7d (total density includes anomalous oxygen)."""

    def test_anomalous_oxygen_included(self, synthetic_coefficients) -> None:
        plain = gtd7(synthetic_coefficients, _input(600.0), Flags())
        drag = gtd7d(synthetic_coefficients, _input(600.0), Flags())
        expected = float(plain.d[5]) + 1.66e-24 * 16.0 * float(plain.d[8])
        assert float(drag.d[8]) > 0.0
        assert float(drag.d[5]) == pytest.approx(expected, rel=1e-12)

    def test_other_slots_unchanged(self, synthetic_coefficients) -> None:
        plain = gtd7(synthetic_coefficients, _input(600.0), Flags())
        drag = gtd7d(synthetic_coefficients, _input(600.0), Flags())
        for i in (0, 1, 2, 3, 4, 6, 7, 8):
            assert float(drag.d[i]) == float(plain.d[i])
        assert jnp.array_equal(drag.t, plain.t)

    def test_identical_below_mesopause(self, synthetic_coefficients) -> None:
        """Anomalous oxygen is zero below 72.5 km, so both drivers agree."""
        plain = gtd7(synthetic_coefficients, _input(40.0), Flags())
        drag = gtd7d(synthetic_coefficients, _input(40.0), Flags())
        assert float(drag.d[5]) == pytest.approx(float(plain.d[5]), rel=1e-12)


# ===========================================================================
# Lower atmosphere
# ===========================================================================


class TestLowerAtmosphere:
    @pytest.mark.parametrize("alt", [0.0, 10.0, 32.5, 50.0, 70.0], ids=lambda a: f"{a:g}km")
    def test_minor_species_zero(self, synthetic_coefficients, alt) -> None:
        d = gtd7(synthetic_coefficients, _input(alt), Flags()).d
        for i in (1, 6, 7, 8):
            assert float(d[i]) == 0.0

    @pytest.mark.parametrize("alt", [0.0, 10.0, 32.5, 50.0, 60.0, 70.0], ids=lambda a: f"{a:g}km")
    def test_positive_temperature_and_density(self, synthetic_coefficients, alt) -> None:
        out = gtd7(synthetic_coefficients, _input(alt), Flags())
        assert float(out.t[1]) > 0.0
        assert float(out.d[5]) > 0.0

    def test_node_temperatures(self, synthetic_coefficients) -> None:
        """Flat expansions put the node temperatures at pma[i][0] * pavgm[i]."""
        t_ground = gtd7(synthetic_coefficients, _input(0.0), Flags()).t[1]
        t_55 = gtd7(synthetic_coefficients, _input(55.0), Flags()).t[1]
        assert float(t_ground) == pytest.approx(286.76, rel=1e-9)
        assert float(t_55) == pytest.approx(261.0, rel=1e-9)

    def test_continuity_at_mesopause(self, synthetic_coefficients) -> None:
        above = gtd7(synthetic_coefficients, _input(72.5), Flags())
        below = gtd7(synthetic_coefficients, _input(72.5 - 1.0e-6), Flags())
        assert float(below.d[2]) == pytest.approx(float(above.d[2]), rel=1e-4)
        assert float(below.t[1]) == pytest.approx(float(above.t[1]), rel=1e-4)

    def test_density_increases_downward(self, synthetic_coefficients) -> None:
        rho = [float(gtd7(synthetic_coefficients, _input(a), Flags()).d[5]) for a in (70.0, 40.0, 10.0, 0.0)]
        for higher, lower in zip(rho, rho[1:]):
            assert lower > higher

    def test_negative_altitude_finite(self, synthetic_coefficients) -> None:
        out = gtd7(synthetic_coefficients, _input(-1.0), Flags())
        assert bool(jnp.all(jnp.isfinite(out.d)))
        assert float(out.t[1]) > 0.0


# ===========================================================================
# Switches
# ===========================================================================


class TestSwitches:
    def test_history_mode_without_history(self, synthetic_coefficients) -> None:
        inp = _input()
        assert inp.ap_a is None
        out = gtd7(synthetic_coefficients, inp, Flags().with_switch(9, -1))
        assert bool(jnp.all(jnp.isfinite(out.d)))

    def test_turbopause_switch(self, synthetic_coefficients) -> None:
        """Switch 15 controls the departures from diffusive equilibrium."""
        on = gtd7(synthetic_coefficients, _input(100.0), Flags())
        off = gtd7(synthetic_coefficients, _input(100.0), Flags().with_switch(15, 0))
        assert float(on.d[1]) != pytest.approx(float(off.d[1]), rel=1e-6)

    def test_turbopause_switch_no_effect_high(self, synthetic_coefficients) -> None:
        """Above every turbopause only the O2 departure correction remains."""
        on = gtd7(synthetic_coefficients, _input(600.0), Flags())
        off = gtd7(synthetic_coefficients, _input(600.0), Flags().with_switch(15, 0))
        for i in (0, 1, 2, 4, 6, 7, 8):
            assert float(on.d[i]) == pytest.approx(float(off.d[i]), rel=1e-12)

    def test_gravity_switch(self, synthetic_coefficients) -> None:
        """Switch 2 off evaluates gravity at 45 degrees latitude."""
        inp = _input()
        flags = Flags().with_switch(2, 0)
        gsurf, re = glatf(jnp.asarray(45.0))
        expected = gts7(synthetic_coefficients, inp, flags, gsurf, re)
        out = gtd7(synthetic_coefficients, inp, flags)
        assert jnp.allclose(out.d, expected.d, rtol=1e-12)


# ===========================================================================
# Purity and JAX transformations
# ===========================================================================


class TestPurity:
    def test_idempotent(self, synthetic_coefficients) -> None:
        inp = _input()
        first = gtd7d(synthetic_coefficients, inp, Flags())
        second = gtd7d(synthetic_coefficients, inp, Flags())
        assert jnp.array_equal(first.d, second.d)
        assert jnp.array_equal(first.t, second.t)

    def test_independent_of_previous_call(self, synthetic_coefficients) -> None:
        """An evaluation in history mode does not affect a later scalar one."""
        inp = _input(ap_a=[50.0] * 7)
        before = gtd7(synthetic_coefficients, inp, Flags())
        gtd7(synthetic_coefficients, inp, Flags().with_switch(9, -1))
        after = gtd7(synthetic_coefficients, inp, Flags())
        assert jnp.array_equal(before.d, after.d)

    def test_coefficients_unchanged(self, synthetic_coefficients) -> None:
        c = synthetic_coefficients
        pdl_before = jnp.array(c.pdl)
        gtd7(c, _input(100.0), Flags())
        assert jnp.array_equal(c.pdl, pdl_before)


class TestJAXTransforms:
    def test_jit_matches_eager(self, synthetic_coefficients) -> None:
        inp = _input(300.0)
        eager = gtd7d(synthetic_coefficients, inp, Flags())
        jitted = jax.jit(gtd7d, static_argnums=2)(synthetic_coefficients, inp, Flags())
        assert jnp.allclose(eager.d, jitted.d, rtol=1e-10, atol=0.0)
        assert jnp.allclose(eager.t, jitted.t, rtol=1e-10)

    def test_vmap_over_altitude(self, synthetic_coefficients) -> None:
        alts = jnp.array([20.0, 90.0, 150.0, 400.0])

        def total_density(alt):
            return gtd7d(synthetic_coefficients, _input(alt), Flags()).d[5]

        rho = jax.vmap(total_density)(alts)
        assert rho.shape == (4,)
        for i, alt in enumerate((20.0, 90.0, 150.0, 400.0)):
            assert float(rho[i]) == pytest.approx(float(total_density(alt)), rel=1e-10)

    def test_vmap_over_inputs(self, synthetic_coefficients) -> None:
        """Input is a pytree and can be batched directly."""
        inp = make_input(
            jnp.array([1.0, 172.0]),
            jnp.array([0.0, 29000.0]),
            jnp.array([200.0, 400.0]),
            jnp.array([0.0, 60.0]),
            jnp.array([0.0, -70.0]),
            f107a=jnp.array([150.0, 150.0]),
            f107=jnp.array([150.0, 200.0]),
            ap=jnp.array([4.0, 15.0]),
        )
        out = jax.vmap(lambda i: gtd7(synthetic_coefficients, i, Flags()))(inp)
        assert out.d.shape == (2, 9)
        assert out.t.shape == (2, 2)
