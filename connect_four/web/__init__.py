"""Flask front end for the Connect Four game."""

from .app import app, main

__all__ = ['app', 'main']
