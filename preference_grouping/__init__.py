__version__ = "0.1.0"

from .web_app import create_app  # noqa: E402,F401
