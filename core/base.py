# retarded_field/core/base.py

from abc import ABC, abstractmethod
from typing import Dict, Any, List

import numpy as np

from .field import GridData, FieldSnapshot
from physics.retarded import evaluate_retarded_field

class Backend(ABC):
    """
    后端抽象基类。
    它定义了所有具体后端（逐点参考、CPU 向量化、GPU）必须实现的通用接口。
    """
    def __init__(self, params: Dict[str, Any], grid: GridData):
        self.params = params
        self.grid = grid
        self.is_quiet = params.get('quiet_mode', False)
        self.xp = None      # 将由子类设置为 numpy 或 cupy
        self.dtype = None   # 快照的存储精度，将由子类设置为 float32 或 float64；场的求值与累加始终为 float64
        self._setup_backend_specifics()

    @abstractmethod
    def _setup_backend_specifics(self):
        """设置后端特定的属性，如 self.xp 和 self.dtype。"""
        pass

    @abstractmethod
    def setup_computation(self):
        """为场计算准备网格等常驻数据。"""
        pass

    @abstractmethod
    def generate_field(self, t: float, charge_list: List) -> FieldSnapshot:
        """计算 t 时刻整个网格上的叠加场快照。"""
        pass

    def _superpose_on_mesh(self, X, Y, t: float, charge_list: List):
        """在整张网格上对所有电荷的贡献做向量/标量求和。"""
        xp = self.xp
        ex = xp.zeros(X.shape, dtype=xp.float64)
        ey = xp.zeros(X.shape, dtype=xp.float64)
        div = xp.zeros(X.shape, dtype=xp.float64)
        curl = xp.zeros(X.shape, dtype=xp.float64)
        for pc in charge_list:
            c_ex, c_ey, c_div, c_curl = evaluate_retarded_field(X, Y, t, pc, self.params, xp)
            ex += c_ex
            ey += c_ey
            div += c_div
            curl += c_curl
        return xp.stack((ex, ey), axis=-1), div, curl

    def _to_snapshot(self, t: float, field, div, curl) -> FieldSnapshot:
        return FieldSnapshot(t, np.asarray(field), np.asarray(div), np.asarray(curl), dtype=self.dtype)
