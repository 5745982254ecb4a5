"""
Services module for GUOBA Data.

This module provides the page-level services:
- experiments: Experiment page composition (curves, percentiles, leaderboard)

Usage:
    from guoba_data.services import get_experiment_service

    service = get_experiment_service()
    view = service.get_view("em-sands")
"""

from .experiments import ExperimentService, get_experiment_service

__all__ = [
    "ExperimentService",
    "get_experiment_service",
]
