from __future__ import annotations

from .performance_dashboard import SizeTiming, make_performance_dashboard, measure_multiplication

__all__ = ["SizeTiming", "make_performance_dashboard", "measure_multiplication"]
