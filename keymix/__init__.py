"""keymix - harmonic mix planning on the Open Key wheel"""

__version__ = "0.1.0"
