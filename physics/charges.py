# retarded_field/physics/charges.py

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

import numpy as np

from physics.trajectories import trajectory_provider_registry

# ==============================================================================
# 1. 点电荷记录
# ==============================================================================

@dataclass(frozen=True)
class ChargeSource:
    """点电荷：位置轨迹函数 + 固定电荷量 (含符号)。"""
    trajectory: Callable
    charge: float
    label: str = ''

    def position(self, t):
        """返回 t 时刻的位置；t < 0 视为 t = 0。"""
        return self.trajectory(np.maximum(t, 0.0))

def charge_positions(charge_list: List[ChargeSource], t: float) -> np.ndarray:
    """返回所有电荷在 t 时刻的位置，形状 (n, 2)。"""
    if not charge_list:
        return np.zeros((0, 2))
    return np.array([[float(v) for v in pc.position(t)] for pc in charge_list])

# ==============================================================================
# 2. 定义配置
#    args 中的 callable 会以 params 为参数求值 (例如依赖光速 c 的角速度)。
# ==============================================================================

charge_configs = {
    'orbiting_dipole': {
        'charges': [
            {'provider': 'circular_orbit', 'q': 1.0, 'label': '+q',
             'args': {'radius': 2.0, 'angular_speed': lambda p: 0.25 * p['c'], 'phase': 0.0}},
            {'provider': 'circular_orbit', 'q': -1.0, 'label': '-q',
             'args': {'radius': 2.0, 'angular_speed': lambda p: 0.25 * p['c'], 'phase': np.pi}},
        ],
        'description': "一对正负电荷在半径 2 的圆轨道上相对旋转，速度为 0.5c。"
    },
    'static_dipole': {
        'charges': [
            {'provider': 'static', 'q': 1.0, 'label': '+q', 'args': {'x0': 1.1, 'y0': 0.3}},
            {'provider': 'static', 'q': -1.0, 'label': '-q', 'args': {'x0': -1.1, 'y0': -0.3}},
        ],
        'description': "关于原点对称放置的静止电偶极子。"
    },
    'static_pair': {
        'charges': [
            {'provider': 'static', 'q': 1.0, 'label': '+q', 'args': {'x0': 1.1, 'y0': 0.3}},
            {'provider': 'static', 'q': 1.0, 'label': '+q', 'args': {'x0': -1.1, 'y0': -0.3}},
        ],
        'description': "关于原点对称放置的两个等量同号静止电荷。"
    },
    'single_static': {
        'charges': [
            {'provider': 'static', 'q': 1.0, 'label': '+q', 'args': {'x0': 0.0, 'y0': 0.0}},
        ],
        'description': "位于原点的单个静止正电荷。"
    },
    'oscillating_charge': {
        'charges': [
            {'provider': 'linear_oscillation', 'q': 1.0, 'label': '+q',
             'args': {'amplitude': 1.0, 'angular_speed': lambda p: 0.2 * p['c'], 'direction': (0.0, 1.0)}},
        ],
        'description': "沿 y 轴简谐振动的单个电荷，最大速度 0.2c。"
    },
    'uniform_drift': {
        'charges': [
            {'provider': 'uniform_motion', 'q': -1.0, 'label': '-q',
             'args': {'start': (-4.0, 0.0), 'velocity': lambda p: (0.5 * p['c'], 0.0)}},
        ],
        'description': "以 0.5c 沿 x 方向匀速运动的负电荷。"
    },
}

def build_charge_list(params: Dict[str, Any]) -> List[ChargeSource]:
    """根据 charge_config_name 建立电荷列表。"""
    c_conf = charge_configs[params['charge_config_name']]
    charge_list = []
    for entry in c_conf['charges']:
        provider = trajectory_provider_registry[entry['provider']]
        args = {k: v(params) if callable(v) else v for k, v in entry.get('args', {}).items()}
        charge_list.append(ChargeSource(provider(**args), float(entry['q']), entry.get('label', '')))
    return charge_list
