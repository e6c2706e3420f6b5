"""assetflow: static asset build pipeline (styles, scripts, views, dev server)."""

__version__ = "0.1.0"
