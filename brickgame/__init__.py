"""Snake and Tetris brick games: game logic, controllers, and curses and tkinter interfaces."""

__version__ = "1.0.0"