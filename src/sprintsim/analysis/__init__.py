"""Monte Carlo difficulty analysis."""

from .montecarlo import MonteCarloRunner, SimulationResults

__all__ = ["MonteCarloRunner", "SimulationResults"]
