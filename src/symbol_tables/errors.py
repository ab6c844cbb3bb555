class InvalidArgument(ValueError):
    """A required point, value or rectangle argument was None"""
