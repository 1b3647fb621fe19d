# retarded_field/physics/retarded.py

from typing import Any, NamedTuple

import numpy as np

from physics.coulomb import coulomb_coefficient, singularity_policy_registry


class TrajectoryError(ValueError):
    """轨迹函数返回了非有限 (NaN / inf) 的位置。"""


class RetardedSample(NamedTuple):
    """单个电荷在一组观测点上的延迟几何量与场值。"""
    ex: Any
    ey: Any
    dx: Any          # 观测点 - 延迟位置
    dy: Any
    distance: Any    # 经奇点策略处理后的延迟距离 R
    rx: Any          # 观测点 - 当前位置
    ry: Any
    r0: Any
    tau: Any         # 延迟时间 t - r0/c
    singular: Any    # 需清零的掩码，或 None


def _checked_position(source, t, xp):
    x, y = source.position(t)
    x = xp.asarray(x, dtype=xp.float64)
    y = xp.asarray(y, dtype=xp.float64)
    if not (bool(xp.all(xp.isfinite(x))) and bool(xp.all(xp.isfinite(y)))):
        raise TrajectoryError(f"错误: 电荷 '{source.label}' 的轨迹在 t={t} 附近返回了非有限位置。")
    return x, y

def velocity_step(params):
    """延迟速度的时间差分步长；未显式设置 (0) 时随当前 dt 取 dt * 1e-3。"""
    return params.get('velocity_step') or params['dt'] * 1e-3

def retarded_velocity(source, tau, params, xp=np):
    """以中心差分估计延迟时刻的速度 ds/dτ。负时间已被截断，因此开始运动前速度为零。"""
    h = velocity_step(params)
    x_plus, y_plus = _checked_position(source, tau + h, xp)
    x_minus, y_minus = _checked_position(source, tau - h, xp)
    return (x_plus - x_minus) / (2.0 * h), (y_plus - y_minus) / (2.0 * h)

def resolve_retarded_position(X, Y, t, source, params, xp=np):
    """
    单次延迟修正：先用当前位置估计距离 r0，再在 t - r0/c 处取电荷位置。
    返回 (rx, ry, r0, tau, sx, sy)。
    """
    px, py = _checked_position(source, t, xp)
    rx, ry = X - px, Y - py
    r0 = xp.hypot(rx, ry)
    tau = t - r0 / params['c']
    sx, sy = _checked_position(source, tau, xp)
    return rx, ry, r0, tau, sx, sy

def _sample_field(X, Y, t, source, params, xp):
    rx, ry, r0, tau, sx, sy = resolve_retarded_position(X, Y, t, source, params, xp)
    dx, dy = X - sx, Y - sy

    policy = singularity_policy_registry[params['singularity_policy']]
    distance, singular = policy(xp.hypot(dx, dy), params, xp)

    # 平方反比：|E| = K q / R²，方向由延迟位置指向观测点
    magnitude = coulomb_coefficient(params) * source.charge / distance**2
    ex = magnitude * (dx / distance)
    ey = magnitude * (dy / distance)
    return RetardedSample(ex, ey, dx, dy, distance, rx, ry, r0, tau, singular)

# ==============================================================================
# 1. 散度与旋度的计算方法
# ==============================================================================

def _analytic_derivatives(sample, X, Y, t, source, params, xp):
    """
    解析雅可比矩阵。记 d = P - s，A = Kq (I/R³ - 3 d dᵀ/R⁵)，
    g = ∂τ/∂P = -(P - p(t)) / (c r0)，v = ds/dτ，则
    J = A - (A v) gᵀ，div = tr J，curl_z = J₁₀ - J₀₁。
    """
    k = coulomb_coefficient(params) * source.charge
    inv_r3 = 1.0 / sample.distance**3
    inv_r5 = inv_r3 / sample.distance**2
    a_xx = k * (inv_r3 - 3.0 * sample.dx * sample.dx * inv_r5)
    a_yy = k * (inv_r3 - 3.0 * sample.dy * sample.dy * inv_r5)
    a_xy = -3.0 * k * sample.dx * sample.dy * inv_r5

    vx, vy = retarded_velocity(source, sample.tau, params, xp)
    # r0 = 0 时 rx = ry = 0，g 取零
    r0 = xp.where(sample.r0 > 0, sample.r0, 1.0)
    gx = -sample.rx / (params['c'] * r0)
    gy = -sample.ry / (params['c'] * r0)

    avx = a_xx * vx + a_xy * vy
    avy = a_xy * vx + a_yy * vy
    div = a_xx + a_yy - (avx * gx + avy * gy)
    curl = avx * gy - avy * gx
    return div, curl

def _central_difference_derivatives(sample, X, Y, t, source, params, xp):
    """通用 ∇ 算子：对同一场函数做空间中心差分。"""
    h = params['fd_step']

    def field(x, y):
        s = _sample_field(x, y, t, source, params, xp)
        return s.ex, s.ey

    ex_xp, ey_xp = field(X + h, Y)
    ex_xm, ey_xm = field(X - h, Y)
    ex_yp, ey_yp = field(X, Y + h)
    ex_ym, ey_ym = field(X, Y - h)

    div = (ex_xp - ex_xm) / (2.0 * h) + (ey_yp - ey_ym) / (2.0 * h)
    curl = (ey_xp - ey_xm) / (2.0 * h) - (ex_yp - ex_ym) / (2.0 * h)
    return div, curl

derivative_method_registry = {
    'analytic': _analytic_derivatives,
    'central_difference': _central_difference_derivatives,
}

# ==============================================================================
# 2. 对外接口
# ==============================================================================

def evaluate_retarded_field(X, Y, t, source, params, xp=np):
    """
    计算单个电荷在观测点 (X, Y) 处、t 时刻的延迟电场贡献。
    X, Y 可为标量或同形状数组，返回 (ex, ey, div, curl_z)。
    """
    X = xp.asarray(X, dtype=xp.float64)
    Y = xp.asarray(Y, dtype=xp.float64)

    if source.charge == 0:
        zeros = xp.zeros_like(X + Y)
        return zeros, zeros.copy(), zeros.copy(), zeros.copy()

    sample = _sample_field(X, Y, t, source, params, xp)
    derivative_func = derivative_method_registry[params['derivative_method']]
    div, curl = derivative_func(sample, X, Y, t, source, params, xp)

    ex, ey = sample.ex, sample.ey
    if sample.singular is not None:
        ex = xp.where(sample.singular, 0.0, ex)
        ey = xp.where(sample.singular, 0.0, ey)
        div = xp.where(sample.singular, 0.0, div)
        curl = xp.where(sample.singular, 0.0, curl)
    return ex, ey, div, curl

def evaluate_point(x: float, y: float, t: float, source, params) -> tuple:
    """单点版本，返回 (np.array([ex, ey]), div, curl_z)。"""
    ex, ey, div, curl = evaluate_retarded_field(x, y, t, source, params)
    return np.array([float(ex), float(ey)]), float(div), float(curl)
