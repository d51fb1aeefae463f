"""Controllers module - Application-level wiring of repositories, services and schedulers."""

from controllers.app_controller import CatalogController

__all__ = ["CatalogController"]
