# retarded_field/config.py

from scipy import constants
from user_config import *

# ==============================================================================
# 1. 物理常數 (預設取自 scipy.constants)
# ==============================================================================

PHYSICAL_CONSTANTS = {
    'epsilon_0': constants.epsilon_0,  # 真空介電常數
    'mu_0': constants.mu_0,            # 真空磁導率
    'c': constants.c,                  # 光速
}

# ==============================================================================
# 2. 唯一的設定字典
# ==============================================================================
def get_config() -> dict:
    """返回模擬與動畫的完整設定字典。"""
    params = {
        # --- 物理常數 ---
        **PHYSICAL_CONSTANTS,

        # --- 時間參數 ---
        'dt': dt,
        'steps': steps,
        't_start': t_start,

        # --- 空間網格 ---
        'x_min': x_min,
        'x_max': x_max,
        'dx_grid': dx_grid,
        'y_min': y_min,
        'y_max': y_max,
        'dy_grid': dy_grid,

        # --- 後端與精度 ---
        'backend': backend,
        'precision': 'float64',

        # --- 物理模型配置 ---
        'charge_config_name': charge_config_name,
        'coulomb_convention': coulomb_convention,
        'singularity_policy': singularity_policy,
        'singularity_epsilon': singularity_epsilon,
        'derivative_method': derivative_method,
        'fd_step': 1e-4,             # 中心差分的空間步長 (公尺)
        'velocity_step': 0.0,        # 延遲速度的時間差分步長 (秒)；0 表示取 dt * 1e-3

        # --- 繪圖設定 ---
        'render_mode': render_mode,
        'background_layer': background_layer,
        'color_scale': color_scale,
        'frame_delay': 0.001,
        'gif_frame_duration': 0.04,
        'plot_output_path': 'field_plots',
        'gif_filename': 'electric_field.gif',
        'plot_summary': True,

        # --- 導出與分析 ---
        'enable_export': enable_export,
        'export_path': 'exported_data',
        'snapshot_interval': snapshot_interval,
        'quiet_mode': False,
    }
    return params
