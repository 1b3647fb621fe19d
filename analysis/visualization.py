# retarded_field/analysis/visualization.py

import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import SymLogNorm
from typing import Dict, Any, List
from PIL import Image

from core.field import GridData, FieldSnapshot
from analysis.series import assemble_stats_series

render_modes = ('none', 'live', 'frames', 'gif')
background_layers = ('none', 'divergence', 'curl')
color_scales = ('linear', 'log')

class VisualizationManager:
    """負責所有與可視化相關的編排工作。"""
    def __init__(self, params: Dict[str, Any], grid: GridData):
        self.params = params
        self.grid = grid
        self.render_mode = params.get('render_mode', 'none')
        self.is_live_plotting = self.render_mode == 'live'
        self.is_quiet = params.get('quiet_mode', False)
        self.output_path = params.get('plot_output_path', '.')
        self.fig = None
        self.ax = None
        self.gif_frames: List[Image.Image] = []

        X, Y = grid.meshgrid()
        self.points_x = X.ravel()
        self.points_y = Y.ravel()
        self._setup_plotting()

    def _setup_plotting(self):
        if self.render_mode == 'none':
            return

        try:
            plt.rcParams['font.sans-serif'] = ['Microsoft YaHei', 'SimHei', 'DejaVu Sans']
            plt.rcParams['axes.unicode_minus'] = False
        except Exception:
            print("警告：設置中文字體失敗，部分標籤可能無法正確顯示。")

        os.makedirs(self.output_path, exist_ok=True)

        if self.is_live_plotting:
            plt.ion()

        self.fig = plt.figure(figsize=(6.5, 6.5), facecolor='black')
        self.ax = self.fig.add_subplot(1, 1, 1)

    def _style_axes(self):
        ax = self.ax
        ax.set_facecolor('black')
        ax.set_xlim(self.grid.x_grid[0], self.grid.x_grid[-1])
        ax.set_ylim(self.grid.y_grid[0], self.grid.y_grid[-1])
        ax.set_aspect('equal', adjustable='box')
        ax.set_xticks([]); ax.set_yticks([])
        for spine in ax.spines.values():
            spine.set_visible(False)

    def _magnitude_to_brightness(self, magnitudes: np.ndarray) -> np.ndarray:
        """把場強映射到 [0, 1] 的灰階亮度，以當前幀的最大值歸一化。"""
        finite = magnitudes[np.isfinite(magnitudes) & (magnitudes > 0)]
        if finite.size == 0:
            return np.zeros_like(magnitudes)

        if self.params.get('color_scale', 'log') == 'log':
            logs = np.log10(np.where(magnitudes > 0, magnitudes, finite.min()))
            low, high = np.log10(finite.min()), np.log10(finite.max())
            if high - low < 1e-12:
                return np.ones_like(magnitudes)
            brightness = (logs - low) / (high - low)
        else:
            brightness = magnitudes / finite.max()
        return np.clip(np.nan_to_num(brightness), 0.0, 1.0)

    @staticmethod
    def charge_color(q: float):
        """正電荷偏藍、負電荷偏紅。"""
        return tuple(np.clip([0.5 - q, 0.0, 0.5 + q], 0.0, 1.0))

    def _draw_background(self, snapshot: FieldSnapshot):
        layer = self.params.get('background_layer', 'none')
        if layer == 'none':
            return
        values = snapshot.divergence if layer == 'divergence' else snapshot.curl
        scale = np.max(np.abs(values))
        if not np.isfinite(scale) or scale == 0:
            return
        norm = SymLogNorm(linthresh=scale * 1e-4, vmin=-scale, vmax=scale)
        extent = [self.grid.x_grid[0], self.grid.x_grid[-1], self.grid.y_grid[0], self.grid.y_grid[-1]]
        self.ax.imshow(values.T, origin='lower', extent=extent, cmap='RdBu_r', norm=norm,
                       interpolation='bilinear', alpha=0.8)

    def render_frame(self, snapshot: FieldSnapshot, positions: np.ndarray, charges: np.ndarray, step: int):
        """繪製一幀：背景散度/旋度、歸一化箭頭與電荷位置。"""
        if self.render_mode == 'none':
            return

        self.ax.clear()
        self._style_axes()
        self._draw_background(snapshot)

        vectors = snapshot.field.reshape(-1, 2)
        magnitudes = np.hypot(vectors[:, 0], vectors[:, 1])
        safe = np.where(magnitudes > 0, magnitudes, 1.0)
        u, v = vectors[:, 0] / safe, vectors[:, 1] / safe
        brightness = self._magnitude_to_brightness(magnitudes)
        colors = np.column_stack((brightness, brightness, brightness))

        self.ax.quiver(self.points_x, self.points_y, u, v, color=colors,
                       angles='xy', scale_units='xy', scale=1.0 / (0.6 * self.grid.dx),
                       width=0.003, headwidth=4)

        for (x, y), q in zip(positions, charges):
            self.ax.scatter([x], [y], s=60, color=self.charge_color(q), zorder=3)

        self.ax.set_title(f't = {snapshot.timestamp:.3e} s', color='white', fontsize=10)

        if self.render_mode == 'frames':
            file_path = os.path.join(self.output_path, f"field_step_{step:05d}.png")
            self.fig.savefig(file_path, dpi=100, facecolor=self.fig.get_facecolor())
        elif self.render_mode == 'gif':
            self.gif_frames.append(self._capture_frame())
        elif self.is_live_plotting:
            plt.draw()
            plt.pause(self.params.get('frame_delay', 0.001))

    def _capture_frame(self) -> Image.Image:
        self.fig.canvas.draw()
        rgba = np.asarray(self.fig.canvas.buffer_rgba())
        return Image.fromarray(rgba).convert('RGB')

    def save_gif(self) -> str:
        """把已擷取的幀組裝成 GIF 動畫。"""
        if not self.gif_frames:
            return None
        file_path = os.path.join(self.output_path, self.params.get('gif_filename', 'electric_field.gif'))
        duration_ms = int(round(1000 * self.params.get('gif_frame_duration', 0.04)))
        self.gif_frames[0].save(file_path, save_all=True, append_images=self.gif_frames[1:],
                                duration=duration_ms, loop=0)
        if not self.is_quiet:
            print(f"GIF 動畫已保存到 '{file_path}' ({len(self.gif_frames)} 幀)。")
        return file_path

    def plot_summary_stats(self, history: List[Dict[str, Any]]):
        if not history or self.render_mode == 'none':
            return None

        if not self.is_quiet: print("\n正在生成場統計演化圖...")
        series = assemble_stats_series(history)
        t = series['timestamp']

        fig, axes = plt.subplots(2, 2, figsize=(14, 9), sharex=True)
        fig.suptitle('電場統計演化圖', fontsize=16)
        ax1, ax2, ax3, ax4 = axes.flatten()

        ax1.plot(t, series['max_field'], 'o-', label='max |E|')
        ax1.plot(t, series['mean_field'], 's-', label='mean |E|')
        ax1.set_ylabel('|E| (V/m)'); ax1.set_title('場強演化'); ax1.legend(); ax1.grid(True)

        ax2.plot(t, series['max_abs_divergence'], 'd-', color='red', label='max |∇·E|')
        ax2.plot(t, series['max_abs_curl'], '^-', color='purple', label='max |(∇×E)_z|')
        ax2.set_title('散度/旋度峰值'); ax2.legend(); ax2.grid(True)

        ax3.plot(t, series['net_divergence'], 'o-', color='green', label='∫ ∇·E dA')
        ax3.set_xlabel('t (s)'); ax3.set_title('散度網格積分'); ax3.legend(); ax3.grid(True)

        ax4.plot(t, series['net_curl'], 'o-', color='orange', label='∫ (∇×E)_z dA')
        ax4.set_xlabel('t (s)'); ax4.set_title('旋度網格積分'); ax4.legend(); ax4.grid(True)

        fig.tight_layout(rect=[0, 0.03, 1, 0.95])
        file_path = os.path.join(self.output_path, "summary_statistics.png")
        fig.savefig(file_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return file_path

    def finalize(self):
        if self.render_mode == 'none':
            return None

        gif_path = None
        if self.render_mode == 'gif':
            gif_path = self.save_gif()
            self.gif_frames = []

        if self.is_live_plotting:
            plt.ioff()
            plt.show()
        elif not self.is_quiet:
            print(f"所有圖像已保存到 '{self.output_path}' 文件夾。")

        plt.close(self.fig)
        return gif_path
