"""HTTP service mode for ng-tooling."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
