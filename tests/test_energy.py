import numpy as np
import pytest
from matplotlib.figure import Figure

from sn2simulation.model.energy import (
    DEFAULT_PROFILE,
    ENERGY_SAMPLE,
    SN2EnergyProfile,
    get_energy_at,
    get_energy_series,
    progress_index,
)


def test_transition_state_is_exactly_the_activation_energy():
    assert DEFAULT_PROFILE.get_energy(0.5) == 110.0
    assert get_energy_at(50) == 110.0


def test_endpoints_are_near_reference_levels():
    # the sigmoid and Gaussian tails do not vanish at t = 0 and t = 1
    assert DEFAULT_PROFILE.get_energy(0.0) == pytest.approx(0.0, abs=0.4)
    assert DEFAULT_PROFILE.get_energy(1.0) == pytest.approx(-20.0, abs=0.4)


def test_profile_peaks_at_the_transition_state():
    energies = [energy for _, energy in get_energy_series()]
    assert int(np.argmax(energies)) == 50


def test_series_has_one_sample_per_integer_progress():
    series = get_energy_series()
    assert len(series) == 101
    assert len(ENERGY_SAMPLE) == 101
    assert [p for p, _ in series] == list(range(101))


def test_energy_at_matches_the_series():
    series = dict(get_energy_series())
    for progress in (0, 13, 50, 77, 100):
        assert get_energy_at(progress) == series[progress]


@pytest.mark.parametrize(
    "progress, index",
    [(0, 0), (49.4, 49), (49.5, 50), (50.49, 50), (99.6, 100), (-3.0, 0), (250.0, 100)],
)
def test_progress_index_rounds_half_up_and_clamps(progress, index):
    assert progress_index(progress) == index


def test_get_energy_at_out_of_range_is_clamped():
    assert get_energy_at(-10) == get_energy_at(0)
    assert get_energy_at(1000) == get_energy_at(100)


def test_vectorised_evaluation_matches_scalar():
    t = np.array([0.1, 0.5, 0.8])
    vector = DEFAULT_PROFILE.get_energy(t)
    scalar = [DEFAULT_PROFILE.get_energy(float(v)) for v in t]
    assert vector == pytest.approx(scalar)


@pytest.mark.parametrize("kwargs", [{"steepness": 0.0}, {"width": -1.0}])
def test_invalid_profile_is_rejected(kwargs):
    with pytest.raises(ValueError):
        SN2EnergyProfile(**kwargs)


def test_custom_profile_keeps_its_barrier():
    profile = SN2EnergyProfile(activation_energy=80.0, reaction_free_energy=-35.0)
    assert profile.get_energy(0.5) == pytest.approx(80.0)


def test_plot_returns_a_figure(tmp_path):
    fig = DEFAULT_PROFILE.plot()
    assert isinstance(fig, Figure)
    out = tmp_path / "profile.png"
    fig.savefig(out)
    assert out.stat().st_size > 0
