from .navigation import GuardState, GuardDecision, NavigationGuard, ProtectedRoute

__all__ = ["GuardState", "GuardDecision", "NavigationGuard", "ProtectedRoute"]
