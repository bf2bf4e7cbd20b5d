class CurveQuoteError(Exception):
    pass


class AccountNotFoundError(CurveQuoteError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Account not found: {address}")
        self.address = address


class OwnershipMismatchError(CurveQuoteError):
    def __init__(self, address: str, expected_owner: str, actual_owner: str) -> None:
        super().__init__(
            f"Account {address} is owned by {actual_owner}, expected {expected_owner}"
        )
        self.address = address
        self.expected_owner = expected_owner
        self.actual_owner = actual_owner


class RpcError(CurveQuoteError):
    pass


class DecodeError(CurveQuoteError):
    pass


class BufferTooShortError(DecodeError):
    def __init__(self, layout: str, required: int, actual: int) -> None:
        super().__init__(f"{layout} needs {required} bytes, got {actual}")
        self.layout = layout
        self.required = required
        self.actual = actual


class UnknownCurveVariantError(DecodeError):
    def __init__(self, value: int) -> None:
        super().__init__(f"Unknown curve type: {value}")
        self.value = value


class InvalidAccountStateError(DecodeError):
    pass


class QuoteError(CurveQuoteError):
    pass


class InsufficientReserveError(QuoteError):
    pass


class InvalidQuoteRequestError(QuoteError):
    pass
