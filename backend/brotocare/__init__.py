"""Brotocare grievance core - complaint lifecycle, audit timeline and comment threads"""

__version__ = "1.0.0"
