# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "msisjax"]
#
# [tool.uv.sources]
# msisjax = { path = ".." }
# ///
"""Print an NRLMSISE-00 altitude profile at one location and time.

Downloads the published coefficient tables on first use (cached under
``~/.cache/msisjax``), then evaluates the model over an altitude grid with
a single JIT-compiled vmap.

Requires msisjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/density_profile.py [OPTIONS]

Examples:
    # Quiet conditions over the default site
    uv run examples/density_profile.py

    # Storm conditions, 10 km steps up to 1000 km
    uv run examples/density_profile.py --f107 250 --ap 80 --step 10 --top 1000
"""

import datetime
import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from msisjax import (
    atmosphere_data,
    constant_solar_activity,
    input_from_datetime,
    load_default_coefficients,
    pressure,
    set_dtype,
)

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    epoch: Annotated[
        str, typer.Option(help="UTC epoch, ISO 8601")
    ] = "2020-06-20T08:03:20",
    lon: Annotated[float, typer.Option(help="Geodetic longitude [deg]")] = -70.0,
    lat: Annotated[float, typer.Option(help="Geodetic latitude [deg]")] = 60.0,
    f107: Annotated[float, typer.Option(help="Daily F10.7 flux [sfu]")] = 150.0,
    f107a: Annotated[
        float | None, typer.Option(help="81-day average F10.7 [sfu], defaults to --f107")
    ] = None,
    ap: Annotated[float, typer.Option(help="Ap index")] = 4.0,
    step: Annotated[float, typer.Option(help="Altitude step [km]")] = 50.0,
    top: Annotated[float, typer.Option(help="Highest altitude [km]")] = 800.0,
) -> None:
    """Evaluate and print the atmosphere from the ground up to *top*."""
    print("Loading coefficients...")
    coefficients = load_default_coefficients()

    when = datetime.datetime.fromisoformat(epoch)
    activity = constant_solar_activity(f107=f107, ap=ap, f107a=f107a)
    alts_km = jnp.arange(0.0, top + step / 2, step)

    @jax.jit
    @jax.vmap
    def profile(alt_km):
        inp = input_from_datetime(when, jnp.stack([lon, lat, alt_km * 1.0e3]), activity)
        data = atmosphere_data(coefficients, inp)
        return data.density, data.temperature, pressure(data), data.mean_atomic_mass

    t_start = time.perf_counter()
    rho, temp, press, mass = jax.block_until_ready(profile(alts_km))
    elapsed = time.perf_counter() - t_start
    print(f"  Evaluated {alts_km.shape[0]} altitudes in {elapsed:.3f}s (including compilation)")

    print(f"\n{'alt [km]':>9} {'rho [kg/m^3]':>14} {'T [K]':>9} {'p [Pa]':>12} {'M [amu]':>8}")
    for row in zip(alts_km, rho, temp, press, mass):
        a, r, t, p, m = (float(v) for v in row)
        print(f"{a:9.1f} {r:14.6e} {t:9.2f} {p:12.4e} {m:8.3f}")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
