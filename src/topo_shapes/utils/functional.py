"""
简化的工具函数
提供拓扑构建中用到的基本集合操作，不依赖第三方库
"""

from __future__ import annotations

from typing import TypeVar, Callable, Iterable, Dict, List, Optional, Any

T = TypeVar('T')
U = TypeVar('U')

# 分组函数
def groupby(key_func: Callable[[T], U], iterable: Iterable[T]) -> Dict[U, List[T]]:
    """按键函数分组，保持首次出现顺序"""
    result: Dict[U, List[T]] = {}
    for item in iterable:
        result.setdefault(key_func(item), []).append(item)
    return result

# 唯一化函数
def unique(iterable: Iterable[T], key: Optional[Callable[[T], Any]] = None) -> List[T]:
    """去重，保持顺序"""
    seen = set()
    result = []
    for item in iterable:
        k = key(item) if key else item
        if k not in seen:
            seen.add(k)
            result.append(item)
    return result

# 重复项
def duplicates(iterable: Iterable[T]) -> List[T]:
    """返回出现多于一次的元素（每个只返回一次，保持顺序）"""
    seen = set()
    reported = set()
    result = []
    for item in iterable:
        if item in seen and item not in reported:
            reported.add(item)
            result.append(item)
        seen.add(item)
    return result
