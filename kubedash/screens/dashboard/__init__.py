"""Dashboard screen domain."""

from kubedash.screens.dashboard.presenter import DashboardPresenter, ScreenKey

__all__ = ["DashboardPresenter", "ScreenKey"]
