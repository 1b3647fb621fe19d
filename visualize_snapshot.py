# retarded_field/visualize_snapshot.py

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import SymLogNorm
import argparse
import os

QUANTITIES = ('magnitude', 'divergence', 'curl')

def load_snapshot(filepath: str) -> dict:
    """載入 ExportManager 導出的 .npz 快照，返回 {名稱: 陣列}。"""
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"錯誤：找不到檔案 '{filepath}'")
    if os.path.splitext(filepath)[1] != '.npz':
        raise ValueError(f"錯誤：不支援的檔案類型 '{filepath}'。僅支援 .npz 快照。")

    with np.load(filepath) as npz_file:
        missing = {'xs', 'ys', 'field', 'divergence', 'curl'} - set(npz_file.files)
        if missing:
            raise ValueError(f"錯誤：檔案 '{filepath}' 缺少陣列 {sorted(missing)}。")
        return {name: npz_file[name] for name in npz_file.files}

def select_quantity(data: dict, quantity: str) -> np.ndarray:
    if quantity == 'magnitude':
        return np.hypot(data['field'][..., 0], data['field'][..., 1])
    if quantity in ('divergence', 'curl'):
        return data[quantity]
    raise ValueError(f"錯誤：未知的物理量 '{quantity}'。可用: {list(QUANTITIES)}")

def visualize_snapshot(filepath: str, quantity: str = 'magnitude', cmap: str = 'RdBu_r', save_path: str = None):
    """把一個快照的場強/散度/旋度畫成熱圖，並疊加歸一化箭頭。"""
    data = load_snapshot(filepath)
    values = select_quantity(data, quantity)
    xs, ys = data['xs'], data['ys']

    # --- 打印數據資訊 ---
    print(f"\n--- 檔案資訊: {os.path.basename(filepath)} ---")
    if 'timestamp' in data:
        print(f"  - 時刻 (t): {float(data['timestamp']):.4e} s")
    print(f"  - 網格維度 (Shape): {values.shape}")
    print(f"  - 最大值 (Max): {np.max(values):.4e}")
    print(f"  - 最小值 (Min): {np.min(values):.4e}")

    fig, ax = plt.subplots(figsize=(8, 7))
    scale = np.max(np.abs(values))
    norm = SymLogNorm(linthresh=scale * 1e-4, vmin=-scale, vmax=scale) if scale > 0 else None
    extent = [xs[0], xs[-1], ys[0], ys[-1]]
    im = ax.imshow(values.T, origin='lower', extent=extent, cmap=cmap, norm=norm, aspect='equal')
    fig.colorbar(im, ax=ax, label=quantity)

    X, Y = np.meshgrid(xs, ys, indexing='ij')
    u, v = data['field'][..., 0], data['field'][..., 1]
    length = np.hypot(u, v)
    length = np.where(length > 0, length, 1.0)
    ax.quiver(X, Y, u / length, v / length, color='k', alpha=0.5, angles='xy')

    if 'charge_positions' in data and len(data['charge_positions']):
        ax.scatter(data['charge_positions'][:, 0], data['charge_positions'][:, 1], c='yellow', edgecolors='k', zorder=3)

    ax.set_title(f"{os.path.basename(filepath)} - [{quantity}]")
    ax.set_xlabel("x (m)")
    ax.set_ylabel("y (m)")
    fig.tight_layout()

    if save_path:
        output_dir = os.path.dirname(save_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        fig.savefig(save_path, dpi=150)
        plt.close(fig)
        print(f"圖像已儲存至: {save_path}")
    else:
        plt.show()
    return values

if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="視覺化導出的延遲電場 .npz 快照。",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("filepath", type=str, help="ExportManager 導出的 .npz 快照路徑。")
    parser.add_argument("--quantity", "-q", type=str, default="magnitude", choices=QUANTITIES,
                        help="要繪製的物理量。")
    parser.add_argument("--cmap", type=str, default="RdBu_r", help="Matplotlib 的色彩對映。")
    parser.add_argument("--save", type=str, default=None, help="提供路徑以儲存圖像。")

    args = parser.parse_args()
    visualize_snapshot(args.filepath, args.quantity, args.cmap, args.save)
