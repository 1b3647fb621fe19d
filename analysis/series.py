# retarded_field/analysis/series.py

import numpy as np
from typing import Any, Dict, List

def assemble_stats_series(history: List[Dict[str, Any]]) -> Dict[str, np.ndarray]:
    """
    把逐步记录的统计字典拼接成按时间排列的数组。
    history 的每个元素形如 {'step': int, 'timestamp': float, 'stats': {...}}。
    """
    if not history:
        return {"step": np.array([], dtype=int), "timestamp": np.array([])}

    series = {
        "step": np.array([h['step'] for h in history], dtype=int),
        "timestamp": np.array([h['timestamp'] for h in history], dtype=float),
    }
    for key in history[0]['stats']:
        if key == 'timestamp':
            continue
        series[key] = np.array([h['stats'].get(key, np.nan) for h in history], dtype=float)
    return series
