# retarded_field/core/reference_backend.py

import numpy as np
from typing import List

from .base import Backend
from .field import FieldSnapshot
from physics.retarded import evaluate_point

class ReferenceBackend(Backend):
    """
    逐点迴圈的參考實作：外層 x、內層 y，對每個網格點累加所有電荷的貢獻。
    速度慢，用於與向量化後端交叉驗證。
    """
    def _setup_backend_specifics(self):
        self.xp = np
        self.dtype = np.float32 if self.params.get('precision', 'float64') == 'float32' else np.float64

    def setup_computation(self):
        if not self.is_quiet: print("  [Backend Setup] Using point-by-point reference backend...")

    def generate_field(self, t: float, charge_list: List) -> FieldSnapshot:
        vector_field, div_field, curl_field = [], [], []

        for _, _, x, y in self.grid.iter_points():
            vector = np.zeros(2)
            div = 0.0
            curl = 0.0
            for pc in charge_list:
                c_vector, c_div, c_curl = evaluate_point(x, y, t, pc, self.params)
                vector += c_vector
                div += c_div
                curl += c_curl
            vector_field.append(vector)
            div_field.append(div)
            curl_field.append(curl)

        return FieldSnapshot(
            t,
            self.grid.reshape_flat(np.array(vector_field).reshape(-1, 2)),
            self.grid.reshape_flat(div_field),
            self.grid.reshape_flat(curl_field),
            dtype=self.dtype,
        )
