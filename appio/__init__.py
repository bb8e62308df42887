# ================================
# file: appio/__init__.py
# ================================
from appio.logger import ReadingLogger, log_to_file

__all__ = ["ReadingLogger", "log_to_file"]
