# retarded_field/core/backends.py

from typing import Dict, Any
from .field import GridData
from .base import Backend

# 导入具体的后端实现以便工厂函数可以使用它们
from .cpu_backend import CPUBackend
from .reference_backend import ReferenceBackend

try:
    from .gpu_backend import GPUBackend
except ImportError:
    GPUBackend = None

backend_names = ('cpu', 'gpu', 'reference')

def get_backend(params: Dict[str, Any], grid: GridData) -> Backend:
    """
    后端工厂函数。
    根据配置创建并返回一个具体的后端实例 (ReferenceBackend, CPUBackend 或 GPUBackend)。
    """
    if params['backend'] == 'reference':
        return ReferenceBackend(params, grid)

    if params['backend'] == 'gpu' and GPUBackend is not None:
        return GPUBackend(params, grid)

    if params['backend'] == 'gpu':
        print("警告：请求了GPU后端，但Cupy不可用。将回退到CPU后端。")

    return CPUBackend(params, grid)
