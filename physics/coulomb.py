# retarded_field/physics/coulomb.py

import numpy as np


class SingularFieldError(ZeroDivisionError):
    """观测点与电荷的延迟位置重合，场强发散。"""


# ==============================================================================
# 1. 库仑系数慣例
# ==============================================================================

def _standard_coefficient(params):
    """标准库仑常数 1/(4πε₀)。"""
    return 1.0 / (4.0 * np.pi * params['epsilon_0'])

def _legacy_coefficient(params):
    """最初动画脚本中的 1/4*π*ϵ₀，按从左到右的运算顺序即 (1/4)·π·ε₀。"""
    return (1.0 / 4.0) * np.pi * params['epsilon_0']

coulomb_convention_registry = {
    'standard': _standard_coefficient,
    'legacy': _legacy_coefficient,
}

def coulomb_coefficient(params) -> float:
    return coulomb_convention_registry[params['coulomb_convention']](params)

# ==============================================================================
# 2. 奇点处理策略
#    输入延迟距离 R，返回 (可安全做除数的 R, 需要清零的掩码或 None)。
# ==============================================================================

def _zero_policy(distance, params, xp):
    singular = distance == 0
    return xp.where(singular, 1.0, distance), singular

def _raise_policy(distance, params, xp):
    if bool(xp.any(distance == 0)):
        raise SingularFieldError("错误: 观测点与电荷的延迟位置重合 (R = 0)，场强无定义。")
    return distance, None

def _epsilon_policy(distance, params, xp):
    return xp.maximum(distance, params['singularity_epsilon']), None

singularity_policy_registry = {
    'zero': _zero_policy,
    'raise': _raise_policy,
    'epsilon': _epsilon_policy,
}
