# retarded_field/analysis/statistics.py

import numpy as np
from scipy.integrate import simpson
from typing import Dict, Any

from core.field import GridData, FieldSnapshot

class StatisticsManager:
    """负责计算每个场快照的统计数据。"""
    def __init__(self, params: Dict[str, Any], grid: GridData):
        self.params = params
        self.xs = grid.get_x_grid_coords()
        self.ys = grid.get_y_grid_coords()

    def calculate_snapshot_stats(self, snapshot: FieldSnapshot) -> Dict[str, float]:
        magnitude = snapshot.get_field_magnitude()
        return {
            "timestamp": snapshot.timestamp,
            "max_field": float(np.max(magnitude)),
            "mean_field": float(np.mean(magnitude)),
            "max_abs_divergence": float(np.max(np.abs(snapshot.divergence))),
            "max_abs_curl": float(np.max(np.abs(snapshot.curl))),
            "net_divergence": self._integrate_over_grid(snapshot.divergence),
            "net_curl": self._integrate_over_grid(snapshot.curl),
        }

    def _integrate_over_grid(self, values: np.ndarray) -> float:
        """对 (nx, ny) 网格上的标量场做二维 Simpson 积分。"""
        if len(self.xs) < 2 or len(self.ys) < 2:
            return np.nan
        inner = simpson(values, x=self.ys, axis=1)
        return float(simpson(inner, x=self.xs))
