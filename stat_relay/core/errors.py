class RelayError(Exception):
    """Any failure that ends a request with the error envelope."""

    err_code = -1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(RelayError):
    pass


class UpstreamError(RelayError):
    pass


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamDecodeError(UpstreamError):
    pass


class UpstreamApplicationError(UpstreamError):
    """The upstream answered, but its envelope code is non-zero."""

    def __init__(self, code: int, message: str):
        super().__init__(message or f"upstream code {code}")
        self.code = code
