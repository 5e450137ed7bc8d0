"""
SnapSolve - screenshot a question, get the answer.

Global hotkeys capture the screen, collect screenshots across a short
session and send them to a cloud vision model (OpenAI or Gemini).
"""

__version__ = "0.1.0"
