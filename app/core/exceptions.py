"""
Application exception types
"""


class InvalidOperationError(Exception):
    """Raised when an operation is not valid for the current state of the data"""
