# retarded_field/physics/trajectories.py

import numpy as np

# ==============================================================================
# 1. 定义轨迹源函数 (Providers)
#    每个工厂返回一个纯函数 t -> (x, y)，t 可以是标量或数组。
#    负时间的截断由 ChargeSource.position 统一处理。
# ==============================================================================

def static(x0=0.0, y0=0.0, **kwargs):
    """静止不动的电荷。"""
    def trajectory(t):
        zero = 0.0 * t
        return x0 + zero, y0 + zero
    return trajectory

def circular_orbit(radius, angular_speed, phase=0.0, center=(0.0, 0.0), **kwargs):
    """
    绕 center 做匀速圆周运动：
    x = cx + R cos(ωt + φ), y = cy + R sin(ωt + φ)
    """
    cx, cy = center
    def trajectory(t):
        angle = angular_speed * t + phase
        return cx + radius * np.cos(angle), cy + radius * np.sin(angle)
    return trajectory

def linear_oscillation(amplitude, angular_speed, direction=(1.0, 0.0), center=(0.0, 0.0), phase=0.0, **kwargs):
    """沿 direction 方向做简谐振动。"""
    ux, uy = direction
    norm = np.hypot(ux, uy)
    if norm == 0:
        raise ValueError("错误: 振动方向不能为零向量。")
    ux, uy = ux / norm, uy / norm
    cx, cy = center
    def trajectory(t):
        s = amplitude * np.sin(angular_speed * t + phase)
        return cx + s * ux, cy + s * uy
    return trajectory

def uniform_motion(start=(0.0, 0.0), velocity=(0.0, 0.0), **kwargs):
    """从 start 出发的匀速直线运动。"""
    x0, y0 = start
    vx, vy = velocity
    def trajectory(t):
        return x0 + vx * t, y0 + vy * t
    return trajectory

# ==============================================================================
# 2. 注册源函数
# ==============================================================================

trajectory_provider_registry = {
    'static': static,
    'circular_orbit': circular_orbit,
    'linear_oscillation': linear_oscillation,
    'uniform_motion': uniform_motion,
}
