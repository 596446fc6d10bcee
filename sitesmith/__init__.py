"""Turn natural-language site descriptions into runnable HTML/CSS/JS bundles."""

__version__ = "0.1.0"
