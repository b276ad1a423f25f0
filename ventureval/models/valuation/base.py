from abc import ABC, abstractmethod
from typing import Dict

class BaseValuation(ABC):
    """
    Common contract of the startup valuation engines.

    Implemented by:
      - RiskAdjustedDCFValuation : base vs. mortality-adjusted DCF
      - ComparableValuation      : peer EV/Revenue multiple with quality overlay

    Contract
    --------
    • from_params() takes only behaviour switches, never company data:
      `strict` (DCF: raise or mark the failure-rate singularity) and
      `fallback_multiple` (comparables: used when no valid peer exists).
    • evaluate() takes one company's inputs as a plain dict and returns a
      plain dict. Rates, margins and survival probabilities are fractions
      (0.15, not 15); only annual growth rates are percentages. Converting a
      percent-denominated ValuationParameters is the caller's job (see
      ventureval.engine.evaluate).
    • evaluate() keeps no state between calls; equal inputs give equal outputs.
    """

    @classmethod
    @abstractmethod
    def from_params(cls, params: Dict) -> "BaseValuation":
        """Build an engine from its behaviour switches."""
        raise NotImplementedError

    @abstractmethod
    def evaluate(self, inputs: Dict) -> Dict:
        """Value one company; see the subclass docstring for required keys."""
        raise NotImplementedError
