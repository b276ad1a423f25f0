from typing import Dict, Optional, Sequence
import numpy as np

from ...exceptions import InvalidParameterError

def as_array(x: Sequence[float], n: Optional[int] = None, name: str = "values") -> np.ndarray:
    """1-D float array, optionally checked to have length n."""
    arr = np.asarray(x, dtype=float).ravel()
    if n is not None and arr.size != n:
        raise InvalidParameterError(f"'{name}' must have {n} entries (got {arr.size}).")
    return arr

def pick_first(inputs: Dict, keys: Sequence[str]) -> Optional[float]:
    for k in keys:
        if k in inputs and inputs[k] is not None:
            return float(inputs[k])
    return None

def require(inputs: Dict, key: str):
    if key not in inputs or inputs[key] is None:
        raise InvalidParameterError(f"Missing '{key}'.")
    return inputs[key]

def check_rate(rate: float, name: str = "rate"):
    if rate is None:
        raise InvalidParameterError(f"Missing '{name}'.")
    if rate <= -1.0:
        raise InvalidParameterError(f"'{name}' must be > -1 (got {rate}); (1 + rate) would be non-positive.")
