"""Device abstraction and snapshot synchronisation core for LG ThinQ appliances."""

__version__ = "0.1.0"
