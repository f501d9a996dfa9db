"""Invariant checks run against simulation states after each advance."""

from .simulation_verifier import SimulationVerifier

__all__ = ['SimulationVerifier']
