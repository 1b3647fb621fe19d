# retarded_field/main.py

import sys
import os
import argparse

# --- 專案路徑設定 ---
_current_file_dir = os.path.dirname(os.path.abspath(__file__))
if _current_file_dir not in sys.path:
    sys.path.insert(0, _current_file_dir)

# --- 匯入模組 ---
from config import get_config
from simulation import Simulation
from simulation_setup import setup_simulation_environment
from physics.coulomb import SingularFieldError
from physics.retarded import TrajectoryError

def run_animation(params: dict):
    """計算每個時間步的延遲電場並繪製動畫。"""
    grid, charge_list, params = setup_simulation_environment(params)
    sim = Simulation(params, grid, charge_list)
    try:
        sim.run()
    finally:
        sim.analyze_and_visualize()
    if not sim.is_quiet:
        sim.timer.report()
    return sim

def run_export(params: dict):
    """只計算並導出快照，不繪圖。"""
    params = {**params, 'render_mode': 'none', 'enable_export': True}
    return run_animation(params)

def build_arg_parser(base_params: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="二維運動點電荷延遲電場 (含散度與旋度) 的計算與動畫程式。",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument('--mode', type=str, default='animate', choices=['animate', 'export'],
                        help='選擇程式運行的模式: "animate" 繪製動畫, "export" 僅導出 .npz 快照')

    # 動態地為所有可配置參數添加命令行接口
    for key, value in base_params.items():
        arg_name = f'--{key.replace("_", "-")}'
        if isinstance(value, bool):
            parser.add_argument(arg_name, action=argparse.BooleanOptionalAction, default=None)
        else:
            parser.add_argument(arg_name, type=type(value), default=None, help=f'覆寫 {key} 參數 (預設: {value})')
    return parser

def apply_overrides(base_params: dict, args: argparse.Namespace) -> dict:
    """將命令行參數覆寫到基礎設定上。"""
    final_params = base_params.copy()
    for key, value in vars(args).items():
        if value is not None and key != 'mode':
            final_params[key] = value
    return final_params

def main(argv=None):
    """程式主入口，解析命令行參數並啟動計算。"""
    base_params = get_config()
    parser = build_arg_parser(base_params)
    args = parser.parse_args(argv)
    final_params = apply_overrides(base_params, args)

    if not final_params.get('quiet_mode', False):
        print("\n" + "="*60)
        print("【運行配置報告 (Runtime Configuration Report)】")
        print(f"運行模式 (Mode): {args.mode}")
        print("-" * 60)
        for key in sorted(final_params.keys()):
            print(f"{key:<35}: {final_params[key]}")
        print("="*60 + "\n")

    try:
        if args.mode == 'animate':
            run_animation(final_params)
        else:
            run_export(final_params)
    except (SingularFieldError, TrajectoryError, ValueError) as e:
        print(f"錯誤：計算中止。{e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
