"""Exceptions raised by the Uptogo shipping integration."""


class UptogoError(Exception):
    """Base class for all Uptogo shipping errors."""


class ConfigurationError(UptogoError):
    """Raised when the store settings cannot be saved."""


class StepAborted(UptogoError):
    """A pipeline step produced no usable result.

    Never leaves the package: the quoting pipeline and the delivery
    lifecycle catch it, log it and turn it into an empty result.
    """

    def __init__(self, step: str, detail: str = ""):
        super().__init__(f"{step}: {detail}" if detail else step)
        self.step = step
        self.detail = detail
