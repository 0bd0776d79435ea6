"""Errors raised by the risk engine."""


class InvalidInputError(ValueError):
    """Applicant data is missing a required field or holds an empty sequence
    the engine needs to divide by.

    ``field`` is the dotted path of the offending value in the camelCase wire
    shape, e.g. ``alternativeData.utilityPayments[0].paymentHistory``.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
