# orders/services/exceptions.py


class OrderError(Exception):
    pass


class OrderNotFoundError(OrderError):
    pass


class EmptyCartError(OrderError):
    pass


class InvalidPaymentMethodError(OrderError):
    pass


class AddressValidationError(OrderError):
    """
    Carries the first violated address rule as a user-facing message.
    """

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
