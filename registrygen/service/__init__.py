"""HTTP service mode for serving a built registry."""

from .app import create_app, run_service, transform_registry_dependencies

__all__ = ["create_app", "run_service", "transform_registry_dependencies"]
