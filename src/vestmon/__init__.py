"""vestmon — canine vitals vest monitor."""

__version__ = "0.1.0"
