""" Single place for the version number, read by setup.py """

__version__ = "1.0.0"
