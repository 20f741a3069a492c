"""
Lockstep processing of cell and read streams
"""

from .synchronizer import CELL_STREAM, PipelineState, RunContext, StreamSynchronizer

__all__ = [
    'CELL_STREAM',
    'PipelineState',
    'RunContext',
    'StreamSynchronizer'
]
