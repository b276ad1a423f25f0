from typing import List, Sequence

from ...config import FORECAST_YEARS
from .utils import as_array

def project_revenue(current: float, growth_rates: Sequence[float]) -> List[float]:
    """
    Compound a base revenue through five annual growth rates.

    Parameters
    ----------
    current : float
        Year-0 revenue (£k).
    growth_rates : sequence of 5 floats
        Annual growth in percent (100 means revenue doubles). Not clamped:
        -100% or lower simply propagates.

    Returns
    -------
    list of 6 floats
        revenues[0] == current; revenues[i] = revenues[i-1] * (1 + g[i-1]/100).
    """
    g = as_array(growth_rates, FORECAST_YEARS, "growth_rates")
    revenues = [float(current)]
    for rate in g:
        revenues.append(revenues[-1] * (1.0 + float(rate) / 100.0))
    return revenues
