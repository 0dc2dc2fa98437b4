"""FileDrop - upload intake and storage service"""

__version__ = "0.1.0"
