# retarded_field/timer.py

import time
from contextlib import contextmanager

class SimpleTimer:
    """命名計時器，累計每個程式區塊的總耗時與執行次數。"""
    def __init__(self):
        self.totals = {}
        self.counts = {}
        self.start_times = {}

    def start(self, name: str):
        self.start_times[name] = time.perf_counter()

    def stop(self, name: str) -> float:
        """停止計時並返回本次耗時；未啟動的計時器返回 0。"""
        started = self.start_times.pop(name, None)
        if started is None:
            return 0.0
        elapsed = time.perf_counter() - started
        self.totals[name] = self.totals.get(name, 0.0) + elapsed
        self.counts[name] = self.counts.get(name, 0) + 1
        return elapsed

    @contextmanager
    def record(self, name: str):
        """with 區塊計時；區塊拋出例外時仍會停止計時。"""
        self.start(name)
        try:
            yield
        finally:
            self.stop(name)

    def summary(self) -> dict:
        """返回 {名稱: (總耗時, 次數, 平均耗時)}，按總耗時由大到小排序。"""
        ordered = sorted(self.totals.items(), key=lambda item: item[1], reverse=True)
        return {name: (total, self.counts[name], total / self.counts[name]) for name, total in ordered}

    def report(self):
        print("\n--- 計時器分析報告 ---")
        summary = self.summary()
        if not summary:
            print("沒有任何計時記錄。")
            return

        for name, (total_time, count, avg_time) in summary.items():
            print(f"[{name}]:")
            print(f"  - 總耗時: {total_time:.4f} 秒")
            print(f"  - 執行次數: {count} 次")
            print(f"  - 平均耗時: {avg_time:.4f} 秒/次")
        print("------------------------\n")
