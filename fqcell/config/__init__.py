"""
Configuration module - run and barcode extraction settings
"""

from .run_config import StreamConfig, RunConfig

__all__ = [
    'StreamConfig',
    'RunConfig'
]
