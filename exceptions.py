class ARBaseException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ARInvalidRequestException(ARBaseException):
    """Client error in the request, corresponds to a 400 response"""


class ARDateFormatException(ARInvalidRequestException):
    """A date string is not in the canonical YYYY-MM-DD form, corresponds to a 400 response"""


class ARUnsupportedMediaTypeException(ARInvalidRequestException):
    """Unsupported media type, corresponds to a 415 response"""


class ARInternalException(ARBaseException):
    """Internal error in the request, corresponds to a 500 response"""


class ARDeserializationException(ARInternalException):
    """A stored item could not be loaded into a compliance record"""
