"""Handlers package initialization."""

from . import start, chat, system

__all__ = ['start', 'chat', 'system']
