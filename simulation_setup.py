# retarded_field/simulation_setup.py

from typing import Dict, Any, List, Tuple

from core.field import GridData
from core.backends import backend_names
from physics import charges, coulomb, retarded
from physics.charges import ChargeSource
from analysis import visualization

def _validate_configs(params: Dict[str, Any]):
    is_quiet = params.get('quiet_mode', False)
    if not is_quiet: print("--- 驗證配置信息 ---")

    config_map = {
        'charge_config_name': (charges.charge_configs, "電荷"),
        'backend': (backend_names, "计算后端"),
        'coulomb_convention': (coulomb.coulomb_convention_registry, "库仑系数"),
        'singularity_policy': (coulomb.singularity_policy_registry, "奇点处理策略"),
        'derivative_method': (retarded.derivative_method_registry, "散度/旋度计算方法"),
        'render_mode': (visualization.render_modes, "绘图模式"),
        'background_layer': (visualization.background_layers, "背景图层"),
        'color_scale': (visualization.color_scales, "颜色尺度"),
    }
    for name, (registry, desc) in config_map.items():
        if params.get(name) not in registry:
            raise ValueError(f"错误: {desc}配置 '{params.get(name)}' 不存在。可用: {list(registry)}")

    for name in ('c', 'dt', 'fd_step', 'singularity_epsilon'):
        if not params.get(name, 0) > 0:
            raise ValueError(f"错误: 参数 '{name}' 必须为正数，收到 {params.get(name)}。")
    if params.get('velocity_step', 0.0) < 0:
        raise ValueError(f"错误: 参数 'velocity_step' 不能为负 (0 表示随 dt 取值)，收到 {params.get('velocity_step')}。")
    if params.get('steps', -1) < 0:
        raise ValueError(f"错误: 步数 steps 不能为负，收到 {params.get('steps')}。")

    if not is_quiet: print("配置验证通过。")

def _setup_grid(params: Dict[str, Any]) -> GridData:
    grid = GridData(params['x_min'], params['x_max'], params['dx_grid'],
                    params['y_min'], params['y_max'], params['dy_grid'])
    if not params.get('quiet_mode', False):
        print(f"--- 初始化採樣網格: {grid.nx} x {grid.ny} 個點 ---")
    return grid

def _setup_charges(params: Dict[str, Any]) -> List[ChargeSource]:
    charge_list = charges.build_charge_list(params)
    if not params.get('quiet_mode', False):
        desc = charges.charge_configs[params['charge_config_name']]['description']
        print(f"--- 初始化電荷: '{params['charge_config_name']}' ({len(charge_list)} 個) ---")
        print(f"    - {desc}")
    return charge_list

def setup_simulation_environment(params: Dict[str, Any]) -> Tuple[GridData, List[ChargeSource], Dict[str, Any]]:
    _validate_configs(params)
    grid = _setup_grid(params)
    charge_list = _setup_charges(params)
    return grid, charge_list, params
