import os
import time

import psutil


# ------------------------------------------------------------
# 性能量測包裝函式
# ------------------------------------------------------------
def measure_performance(algorithm_func, **kwargs):
    """
    執行 algorithm_func(**kwargs) 一次並量測 wall time、CPU time、RSS memory．

    algorithm_func 必須回傳 (cost, tour)，例如 held_karp．

    Returns:
        (cost, tour, wall_time_s, cpu_time_s, mem_mb)
    """
    process = psutil.Process(os.getpid())
    start_wall = time.perf_counter()     # 記錄真實世界流逝時間
    start_cpu = process.cpu_times()      # 記錄 CPU 使用時間

    cost, tour = algorithm_func(**kwargs)

    end_wall = time.perf_counter()
    end_cpu = process.cpu_times()
    mem_mb = process.memory_info().rss / (1024 * 1024)   # 常駐記憶體大小 (MB)

    wall_time = end_wall - start_wall
    cpu_time = ((end_cpu.user - start_cpu.user)
                + (end_cpu.system - start_cpu.system))

    return cost, tour, wall_time, cpu_time, mem_mb
