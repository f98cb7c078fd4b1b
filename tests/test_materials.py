"""
Tests for the material coefficient grid.
"""

import numpy as np
import pytest
from invlens.config import SimulationParameters
from invlens.helpers import check_update_stability
from invlens.simulation.meshing import MaterialGrid, COEFFICIENT_NAMES

@pytest.fixture(scope="module")
def materials():
    return MaterialGrid(SimulationParameters())

def test_lens_band_uses_scaled_permittivity(materials):
    """EzH is eps/9 for 100 < x < 150 and eps elsewhere, independent of y."""
    ez_h = materials.to_numpy("EzH")
    x = np.arange(200)
    in_lens = (x > 100) & (x < 150)

    assert np.all(ez_h[:, in_lens] == 377.0 / 9.0)
    assert np.all(ez_h[:, ~in_lens] == 377.0)
    # Both band edges belong to the background
    assert materials.EzH[100, 0] == 377.0
    assert materials.EzH[150, 199] == 377.0
    assert materials.EzH[101, 57] == pytest.approx(377.0 / 9.0)

def test_background_coefficients(materials):
    """Outside the lens the magnetic weights are 1/eps and the decay weights are 1."""
    for name in ("EzE", "HyH", "HxH"):
        assert np.all(materials.to_numpy(name) == 1.0)
    for name in ("HyE", "HxE"):
        assert np.all(materials.to_numpy(name) == 1.0 / 377.0)

def test_lossy_lens_coefficients():
    """With loss, only lens cells carry the loss factors."""
    params = SimulationParameters(grid_size=20, loss=0.2, lens_start=5, lens_stop=10, source_index=0)
    materials = MaterialGrid(params)

    decay = 0.8 / 1.2
    assert materials.EzH[6, 3] == pytest.approx(377.0 / 9.0 / 0.8)
    assert materials.EzE[6, 3] == pytest.approx(decay)
    assert materials.HyH[6, 3] == pytest.approx(decay)
    assert materials.HxH[6, 3] == pytest.approx(decay)
    assert materials.HyE[6, 3] == pytest.approx(1.0 / 377.0 / 1.2)
    assert materials.HxE[6, 3] == pytest.approx(1.0 / 377.0 / 1.2)
    assert materials.EzH[2, 3] == 377.0
    assert materials.EzE[2, 3] == 1.0

def test_construction_is_idempotent():
    """Two builds from the same parameters give identical coefficient grids."""
    params = SimulationParameters()
    first = MaterialGrid(params)
    second = MaterialGrid(params)

    assert first.equals(second)
    for name in COEFFICIENT_NAMES:
        assert np.array_equal(first.to_numpy(name), second.to_numpy(name))

def test_legacy_ez_coefficient_is_first_row(materials):
    """Legacy Ez update reads EzH by column only, i.e. row y = 0."""
    legacy = materials.ez_h_for_update(legacy_indexing=True)
    full = materials.ez_h_for_update(legacy_indexing=False)

    assert legacy.shape == (200,)
    assert full.shape == (200, 200)
    assert np.array_equal(legacy, full[0, :])

def test_permittivity_map_and_mask(materials):
    assert materials.lens_mask.sum() == 49 * 200
    assert materials.permittivity[0, 120] == pytest.approx(377.0 / 9.0)
    assert materials.permittivity[0, 20] == 377.0

def test_reference_constants_exceed_courant_limit(materials):
    """The reference weights give a Courant number of 1, above the 2D limit."""
    is_stable, courant, limit = check_update_stability(materials)

    assert not is_stable
    assert courant == pytest.approx(1.0)
    assert limit == pytest.approx(1.0 / np.sqrt(2.0))

def test_unknown_coefficient_raises(materials):
    with pytest.raises(AttributeError):
        materials.Hz
