"""
Entity Forms

Compiles read/write schema descriptors into render-ready entity form
configurations.
"""

__version__ = "0.1.0"
