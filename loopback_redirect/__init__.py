"""Loopback Redirect

Capture OAuth 2.0 authorization codes on a short-lived loopback HTTP listener.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("loopback-redirect")
except PackageNotFoundError:
    __version__ = "0.1.0"
__author__ = "Loopback Redirect"
