__version__ = "0.1.0"

__all__ = ["__version__", "audit"]


def audit(*args, **kwargs):
    from .engine import audit as _audit

    return _audit(*args, **kwargs)
