"""
Wireframe Reader - crawls a wireframe listing site and collects its assets.

This package walks every same-domain page reachable from a root URL,
classifies the links it finds, and downloads the wireframe images and
documents along with a JSON report.
"""

__version__ = "1.0.0"
__author__ = "GytX Developer"
