# retarded_field/core/field.py

from typing import Dict, Iterator, Tuple

import numpy as np


class GridData:
    """固定的二维采样网格，由两条一维坐标序列做笛卡尔积而成 (上下界皆包含)。"""
    def __init__(self, x_min: float, x_max: float, dx: float, y_min: float, y_max: float, dy: float):
        self.x_grid = self._axis(x_min, x_max, dx, 'x')
        self.y_grid = self._axis(y_min, y_max, dy, 'y')
        self.x_min, self.x_max, self.dx = x_min, x_max, dx
        self.y_min, self.y_max, self.dy = y_min, y_max, dy
        self.nx = len(self.x_grid)
        self.ny = len(self.y_grid)

    @staticmethod
    def _axis(start: float, end: float, step: float, name: str) -> np.ndarray:
        if step <= 0:
            raise ValueError(f"错误: {name} 方向的网格步长必须为正数，收到 {step}。")
        if end < start:
            raise ValueError(f"错误: {name} 方向的上界 {end} 小于下界 {start}。")
        # 与 start:step:end 区间一致：末点不超过上界
        num = int(np.floor((end - start) / step + 1e-9)) + 1
        return np.linspace(start, start + (num - 1) * step, num)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.nx, self.ny)

    def get_x_grid_coords(self) -> np.ndarray:
        return self.x_grid

    def get_y_grid_coords(self) -> np.ndarray:
        return self.y_grid

    def meshgrid(self, xp=np):
        """返回形状 (nx, ny) 的 X, Y，索引 [i, j] 对应 (xs[i], ys[j])。"""
        return xp.meshgrid(xp.asarray(self.x_grid), xp.asarray(self.y_grid), indexing='ij')

    def iter_points(self) -> Iterator[Tuple[int, int, float, float]]:
        """外层 x、内层 y 的固定遍历顺序。"""
        for i, x in enumerate(self.x_grid):
            for j, y in enumerate(self.y_grid):
                yield i, j, float(x), float(y)

    def reshape_flat(self, values) -> np.ndarray:
        """把按 iter_points 顺序排列的一维结果还原为 (nx, ny, ...) 网格。"""
        values = np.asarray(values)
        if values.shape[0] != self.nx * self.ny:
            raise ValueError(f"错误: 需要 {self.nx * self.ny} 个网格值，收到 {values.shape[0]} 个。")
        return values.reshape(self.shape + values.shape[1:])


class FieldSnapshot:
    """某一时刻的电场、散度与旋度 (z 分量)。构造后不可修改。"""
    def __init__(self, timestamp: float, field: np.ndarray, divergence: np.ndarray, curl: np.ndarray,
                 dtype=np.float64):
        field = np.array(field, dtype=dtype)
        divergence = np.array(divergence, dtype=dtype)
        curl = np.array(curl, dtype=dtype)

        grid_shape = divergence.shape
        if field.shape != grid_shape + (2,) or curl.shape != grid_shape:
            raise ValueError(
                f"错误: 快照形状不一致 field={field.shape}, divergence={divergence.shape}, curl={curl.shape}。"
            )

        for arr in (field, divergence, curl):
            arr.flags.writeable = False

        self.timestamp = float(timestamp)
        self.field = field
        self.divergence = divergence
        self.curl = curl

    @classmethod
    def zeros(cls, timestamp: float, shape: Tuple[int, int]) -> 'FieldSnapshot':
        return cls(timestamp, np.zeros(shape + (2,)), np.zeros(shape), np.zeros(shape))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.divergence.shape

    def get_field_magnitude(self) -> np.ndarray:
        return np.hypot(self.field[..., 0], self.field[..., 1])

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {
            'timestamp': np.array(self.timestamp),
            'field': self.field,
            'divergence': self.divergence,
            'curl': self.curl,
        }
