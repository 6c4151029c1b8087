"""Command message handling for UI collaborators."""

from .dispatcher import ERROR_TYPE, MessageDispatcher

__all__ = ['ERROR_TYPE', 'MessageDispatcher']
