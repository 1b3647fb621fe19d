# retarded_field/simulation.py

import numpy as np
from typing import Dict, Any, List
from tqdm import tqdm

from core.backends import get_backend
from core.field import GridData, FieldSnapshot
from physics.charges import ChargeSource, charge_positions
from analysis.statistics import StatisticsManager
from analysis.io import HistoryManager, ExportManager
from analysis.visualization import VisualizationManager
from timer import SimpleTimer

class Simulation:
    def __init__(self, params: Dict[str, Any], grid: GridData, charge_list: List[ChargeSource]):
        self.params = params
        self.is_quiet = self.params.get('quiet_mode', False)
        self.grid = grid
        self.charge_list = list(charge_list)
        self.charges = np.array([pc.charge for pc in self.charge_list])

        if not self.is_quiet: print("\n--- 初始化核心組件 ---")
        self.backend = get_backend(self.params, grid)
        self.backend.setup_computation()

        self.stats_manager = StatisticsManager(self.params, grid)
        self.history_manager = HistoryManager(self.params)
        self.export_manager = ExportManager(self.params, grid)
        self.viz_manager = VisualizationManager(self.params, grid)

        self.timer = SimpleTimer()
        self.last_snapshot = None

    def set_timer(self, timer):
        """從外部接收計時器物件。"""
        self.timer = timer

    def time_at(self, step: int) -> float:
        return self.params.get('t_start', 0.0) + step * self.params['dt']

    def generate_snapshot(self, t: float) -> FieldSnapshot:
        """計算 t 時刻的場快照。任何錯誤都直接向上拋出。"""
        with self.timer.record("場計算 (generate_field)"):
            return self.backend.generate_field(t, self.charge_list)

    def run(self, num_steps: int = 0) -> FieldSnapshot:
        """逐步計算並繪製 t = t_start + k·dt (k = 0..steps) 的場，返回最後一幀快照。"""
        p = self.params
        total_steps = num_steps if num_steps > 0 else p['steps']

        progress_bar = tqdm(range(total_steps + 1), desc="  時間步進度", leave=False, disable=self.is_quiet)

        for step in progress_bar:
            t = self.time_at(step)
            snapshot = self.generate_snapshot(t)
            positions = charge_positions(self.charge_list, t)

            if self.history_manager.should_snapshot(step, total_steps):
                with self.timer.record("統計與存檔"):
                    stats = self.stats_manager.calculate_snapshot_stats(snapshot)
                    self.history_manager.record_snapshot({"step": step, "timestamp": t, "stats": stats})
                    self.export_manager.export_snapshot(step, snapshot, positions, self.charges)

            with self.timer.record("繪圖 (render_frame)"):
                self.viz_manager.render_frame(snapshot, positions, self.charges, step)

            self.last_snapshot = snapshot

        return self.last_snapshot

    def analyze_and_visualize(self):
        """輸出統計時間序列並收尾繪圖。"""
        history = self.history_manager.get_history()
        self.export_manager.export_history(history)

        if self.params.get('plot_summary', True):
            self.viz_manager.plot_summary_stats(history)

        return self.viz_manager.finalize()
