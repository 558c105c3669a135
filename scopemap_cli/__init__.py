"""
scopemap CLI - Command-line interface for zone classification.

Loads a YAML host document, runs one classification pass and prints the
per-category summary.

Usage:
    scopemap classify document.yaml
    scopemap classify document.yaml --config config/scopemap.yaml --json
    scopemap zones document.yaml
"""

__version__ = "1.0.0"
