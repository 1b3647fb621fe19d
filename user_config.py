# retarded_field/user_config.py

# ==============================================================================
# 用戶常用配置 (User Configuration)
# 您可以在此處快速調整模擬和動畫的關鍵參數
# ==============================================================================

# --- 時間設定 ---
dt = 7.5e-10      # 時間步長 (秒)
steps = 250       # 步數，總共輸出 steps + 1 幀
t_start = 0.0

# --- 空間網格 (上下界皆包含在內) ---
x_min, x_max, dx_grid = -5.0, 5.0, 0.25
y_min, y_max, dy_grid = -5.0, 5.0, 0.25

# --- 電荷配置 (見 physics/charges.py 中的 charge_configs) ---
charge_config_name = 'orbiting_dipole'

# --- 計算後端: 'cpu' (NumPy 向量化), 'gpu' (CuPy), 'reference' (逐點迴圈) ---
backend = 'cpu'

# --- 庫侖係數慣例 ---
# 'standard': 1/(4πε₀)
# 'legacy'  : (1/4)·π·ε₀，與最初動畫腳本的寫法一致
coulomb_convention = 'standard'

# --- 觀測點與延遲位置重合時的處理方式: 'zero', 'raise', 'epsilon' ---
singularity_policy = 'zero'
singularity_epsilon = 1e-6

# --- 散度與旋度的計算方式: 'analytic' 或 'central_difference' ---
derivative_method = 'analytic'

# --- 繪圖輸出: 'none', 'live', 'frames', 'gif' ---
render_mode = 'gif'
background_layer = 'none'   # 'none', 'divergence', 'curl'
color_scale = 'log'         # 'linear' 或 'log'

# --- 資料導出 ---
enable_export = False
snapshot_interval = 25
