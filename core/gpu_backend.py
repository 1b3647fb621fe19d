# retarded_field/core/gpu_backend.py

import cupy as cp
from typing import List

from .base import Backend
from .field import FieldSnapshot

class GPUBackend(Backend):
    """使用 CuPy 在 GPU 上向量化计算的后端。轨迹函数需只使用 NumPy 通用函数。"""
    def _setup_backend_specifics(self):
        self.xp = cp
        self.dtype = self.xp.float32 if self.params.get('precision', 'float64') == 'float32' else self.xp.float64

    def setup_computation(self):
        if not self.is_quiet: print("  [Backend Setup] Moving sampling grid to GPU...")
        self.X_gpu, self.Y_gpu = self.grid.meshgrid(self.xp)

    def generate_field(self, t: float, charge_list: List) -> FieldSnapshot:
        field_gpu, div_gpu, curl_gpu = self._superpose_on_mesh(self.X_gpu, self.Y_gpu, t, charge_list)
        return self._to_snapshot(
            t, self.xp.asnumpy(field_gpu), self.xp.asnumpy(div_gpu), self.xp.asnumpy(curl_gpu)
        )
