# retarded_field/analysis/io.py

import os
import numpy as np
from typing import Dict, Any, List

from core.field import FieldSnapshot
from analysis.series import assemble_stats_series

class HistoryManager:
    """管理各时间步统计记录的保存和检索。"""
    def __init__(self, params: Dict[str, Any]):
        self.snapshot_interval = max(int(params.get('snapshot_interval', 1)), 1)
        self.simulation_history: List[Dict[str, Any]] = []

    def should_snapshot(self, step: int, total_steps: int) -> bool:
        """判断当前时间步是否需要记录。step 从 0 开始，total_steps 为最后一步。"""
        is_first = step == 0
        is_last = step == total_steps
        is_interval = step % self.snapshot_interval == 0
        return is_first or is_last or is_interval

    def record_snapshot(self, record: Dict[str, Any]):
        self.simulation_history.append(record)

    def get_history(self) -> List[Dict[str, Any]]:
        return self.simulation_history

class ExportManager:
    """负责将场快照导出到磁盘。"""
    def __init__(self, params: Dict[str, Any], grid):
        self.is_enabled = params.get('enable_export', False)
        self.export_path = params.get('export_path', 'exported_data')
        self.grid = grid
        if self.is_enabled:
            if not os.path.isabs(self.export_path):
                self.export_path = os.path.join(os.getcwd(), self.export_path)
            os.makedirs(self.export_path, exist_ok=True)
            if not params.get('quiet_mode', False):
                print(f"  [數據導出] 功能已啟用。數據將被保存到: '{self.export_path}'")

    def export_snapshot(self, step: int, snapshot: FieldSnapshot, positions: np.ndarray, charges: np.ndarray):
        """将单个时间步的快照导出为 .npz 文件。"""
        if not self.is_enabled:
            return None

        file_path = os.path.join(self.export_path, f"field_snapshot_step_{step:05d}.npz")
        data_to_save = {
            **snapshot.to_dict(),
            'step': np.array(step),
            'xs': self.grid.get_x_grid_coords(),
            'ys': self.grid.get_y_grid_coords(),
            'charge_positions': positions,
            'charges': charges,
        }

        try:
            np.savez_compressed(file_path, **data_to_save)
        except IOError as e:
            print(f"警告：寫入文件 {file_path} 失敗: {e}")
            return None
        return file_path

    def export_history(self, history: List[Dict[str, Any]]):
        """将统计时间序列导出为一个 .npz 文件。"""
        if not self.is_enabled or not history:
            return None

        file_path = os.path.join(self.export_path, "stats_history.npz")
        try:
            np.savez_compressed(file_path, **assemble_stats_series(history))
        except IOError as e:
            print(f"警告：寫入文件 {file_path} 失敗: {e}")
            return None
        return file_path
