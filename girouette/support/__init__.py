"""
Support Package
"""
from girouette.support.config import Config
from girouette.support.str import Str

__all__ = [
    'Config',
    'Str',
]
