import numpy as np
import pytest

from physics.charges import ChargeSource
from physics.coulomb import SingularFieldError
from physics.retarded import (
    TrajectoryError,
    evaluate_point,
    evaluate_retarded_field,
    resolve_retarded_position,
    retarded_velocity,
    velocity_step,
)
from physics.trajectories import circular_orbit, static, uniform_motion


def test_static_unit_charge_points_radially_outward(params, unit_charge_at_origin):
    k = 1.0 / (4.0 * np.pi * params['epsilon_0'])
    field, div, curl = evaluate_point(1.0, 0.0, 0.0, unit_charge_at_origin, params)

    np.testing.assert_allclose(field, [k, 0.0], rtol=1e-12)
    # 平面内平方反比场: div = -Kq/ρ³
    assert div == pytest.approx(-k, rel=1e-12)
    assert curl == 0.0


def test_legacy_coefficient_matches_original_expression(params, unit_charge_at_origin):
    params['coulomb_convention'] = 'legacy'
    k = (1.0 / 4.0) * np.pi * params['epsilon_0']
    field, _, _ = evaluate_point(2.0, 0.0, 0.0, unit_charge_at_origin, params)
    np.testing.assert_allclose(field, [k / 4.0, 0.0], rtol=1e-12)


def test_negative_charge_points_inward(params, unit_charge_at_origin):
    source = ChargeSource(unit_charge_at_origin.trajectory, -2.0)
    field, _, _ = evaluate_point(0.0, 3.0, 0.0, source, params)
    assert field[0] == pytest.approx(0.0, abs=1e-30)
    assert field[1] < 0


def test_zero_charge_contributes_exact_zeros(params):
    params['singularity_policy'] = 'raise'
    source = ChargeSource(static(0.5, 0.5), 0.0)
    X, Y = np.meshgrid(np.linspace(-1, 1, 5), np.linspace(-1, 1, 5), indexing='ij')
    for values in evaluate_retarded_field(X, Y, 1e-8, source, params):
        assert values.shape == X.shape
        assert np.all(values == 0.0)


def test_zero_policy_clears_coincident_point(params, unit_charge_at_origin):
    field, div, curl = evaluate_point(0.0, 0.0, 0.0, unit_charge_at_origin, params)
    assert np.all(field == 0.0)
    assert div == 0.0 and curl == 0.0


def test_raise_policy_reports_singularity(params, unit_charge_at_origin):
    params['singularity_policy'] = 'raise'
    with pytest.raises(SingularFieldError):
        evaluate_point(0.0, 0.0, 0.0, unit_charge_at_origin, params)


def test_epsilon_policy_stays_finite(params, unit_charge_at_origin):
    params['singularity_policy'] = 'epsilon'
    field, div, curl = evaluate_point(0.0, 0.0, 0.0, unit_charge_at_origin, params)
    assert np.all(field == 0.0)
    assert np.isfinite(div) and np.isfinite(curl)


def test_non_finite_trajectory_raises(params):
    source = ChargeSource(lambda t: (np.nan * t, 0.0 * t), 1.0, 'broken')
    with pytest.raises(TrajectoryError):
        evaluate_point(1.0, 1.0, 0.0, source, params)


def test_retarded_position_uses_single_delay_pass(params):
    c = params['c']
    source = ChargeSource(uniform_motion((0.0, 0.0), (0.5 * c, 0.0)), 1.0)
    t = 1e-8
    rx, ry, r0, tau, sx, sy = resolve_retarded_position(3.0, 4.0, t, source, params)

    current_x = 0.5 * c * t
    expected_r0 = np.hypot(3.0 - current_x, 4.0)
    expected_tau = t - expected_r0 / c
    assert r0 == pytest.approx(expected_r0)
    assert tau == pytest.approx(expected_tau)
    assert sx == pytest.approx(0.5 * c * expected_tau)
    assert sy == pytest.approx(0.0)

    field, _, _ = evaluate_point(3.0, 4.0, t, source, params)
    direction = np.array([3.0 - sx, 4.0 - sy])
    np.testing.assert_allclose(field / np.linalg.norm(field), direction / np.linalg.norm(direction), rtol=1e-9)


def test_before_start_field_is_static_coulomb(params, small_grid):
    c = params['c']
    moving = ChargeSource(circular_orbit(2.0, 0.25 * c), 1.0)
    resting = ChargeSource(static(2.0, 0.0), 1.0)
    X, Y = small_grid.meshgrid()

    for got, expected in zip(evaluate_retarded_field(X, Y, 0.0, moving, params),
                             evaluate_retarded_field(X, Y, 0.0, resting, params)):
        np.testing.assert_allclose(got, expected, rtol=1e-12, atol=0.0)


def test_retarded_velocity_is_zero_before_motion_starts(params):
    c = params['c']
    source = ChargeSource(circular_orbit(2.0, 0.25 * c), 1.0)
    vx, vy = retarded_velocity(source, np.array([-1e-9, -5e-9]), params)
    assert np.all(vx == 0.0) and np.all(vy == 0.0)

    vx, vy = retarded_velocity(source, 1e-8, params)
    assert np.hypot(vx, vy) == pytest.approx(0.5 * c, rel=1e-6)


def test_velocity_step_follows_dt_unless_set(params):
    params['dt'] = 2e-9
    assert velocity_step(params) == pytest.approx(2e-12)
    params['velocity_step'] = 5e-13
    assert velocity_step(params) == 5e-13


def _ring_points(radius=4.0, count=12):
    angles = np.linspace(0.0, 2.0 * np.pi, count, endpoint=False)
    return radius * np.cos(angles), radius * np.sin(angles)


@pytest.mark.parametrize('t', [5e-8, 7.3e-8])
def test_analytic_derivatives_match_central_difference(params, t):
    c = params['c']
    source = ChargeSource(circular_orbit(2.0, 0.25 * c, phase=0.3), 1.0)
    X, Y = _ring_points()

    params['derivative_method'] = 'analytic'
    _, _, div_a, curl_a = evaluate_retarded_field(X, Y, t, source, params)
    params['derivative_method'] = 'central_difference'
    _, _, div_fd, curl_fd = evaluate_retarded_field(X, Y, t, source, params)

    np.testing.assert_allclose(div_fd, div_a, rtol=1e-5, atol=1e-6 * np.max(np.abs(div_a)))
    np.testing.assert_allclose(curl_fd, curl_a, rtol=1e-5, atol=1e-6 * np.max(np.abs(curl_a)))


def test_moving_charge_has_curl_static_charge_does_not(params):
    c = params['c']
    X, Y = _ring_points()
    moving = ChargeSource(circular_orbit(2.0, 0.25 * c), 1.0)
    resting = ChargeSource(static(2.0, 0.0), 1.0)

    _, _, _, curl_moving = evaluate_retarded_field(X, Y, 5e-8, moving, params)
    _, _, _, curl_resting = evaluate_retarded_field(X, Y, 5e-8, resting, params)

    assert np.max(np.abs(curl_moving)) > 0
    assert np.all(curl_resting == 0.0)


def test_point_and_array_evaluation_agree(params):
    c = params['c']
    source = ChargeSource(circular_orbit(2.0, 0.25 * c), -1.0)
    X, Y = _ring_points(3.0, 5)
    ex, ey, div, curl = evaluate_retarded_field(X, Y, 3e-8, source, params)

    for i in range(len(X)):
        field, d, cz = evaluate_point(X[i], Y[i], 3e-8, source, params)
        np.testing.assert_allclose(field, [ex[i], ey[i]], rtol=1e-12)
        assert d == pytest.approx(div[i], rel=1e-12)
        assert cz == pytest.approx(curl[i], rel=1e-12, abs=1e-300)
