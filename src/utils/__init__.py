"""
Utility modules for the Wise transfer pipeline.
"""

from .result import run_step, StepResult

__all__ = ['run_step', 'StepResult']
