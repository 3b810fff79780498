"""
Analysis modules for schedule risk and what-if scenarios.
"""

from .critical_path import analyze_critical_path, print_critical_path_report
from .task_impact import analyze_task_impact, analyze_task_sensitivity

__all__ = [
    'analyze_critical_path',
    'print_critical_path_report',
    'analyze_task_impact',
    'analyze_task_sensitivity',
]
