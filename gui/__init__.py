# ================================
# file: gui/__init__.py
# ================================
"""Matplotlib field viewer/editor. Imported lazily by main so headless runs
never touch a GUI backend.
"""
