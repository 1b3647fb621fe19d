# retarded_field/core/cpu_backend.py

import numpy as np
from typing import List

from .base import Backend
from .field import FieldSnapshot

class CPUBackend(Backend):
    """使用 NumPy 在整张网格上向量化计算的后端。"""
    def _setup_backend_specifics(self):
        self.xp = np
        # precision 只影响快照的存储精度
        self.dtype = np.float64 if self.params.get('precision', 'float64') == 'float64' else np.float32

    def setup_computation(self):
        if not self.is_quiet: print("  [Backend Setup] Initializing CPU backend components...")
        self.X, self.Y = self.grid.meshgrid(self.xp)

    def generate_field(self, t: float, charge_list: List) -> FieldSnapshot:
        field, div, curl = self._superpose_on_mesh(self.X, self.Y, t, charge_list)
        return self._to_snapshot(t, field, div, curl)
