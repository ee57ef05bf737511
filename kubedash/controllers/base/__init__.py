"""Base controller classes."""

from kubedash.controllers.base.base_controller import ActionResult, BaseController

__all__ = ["ActionResult", "BaseController"]
