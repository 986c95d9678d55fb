"""
chatplatform - client-side helpers cho Agent Chat API.
"""

__version__ = "0.1.0"
