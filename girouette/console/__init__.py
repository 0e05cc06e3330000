"""
Console Package
"""
from girouette.console.command import Command

__all__ = ['Command']
