"""Custom exceptions for fixing context."""


class UnsupportedFixError(ValueError):
    """
    Exception raised when asked to apply a fix type the applier doesn't know.

    A stale fix (anchor no longer present) is not an error; the applier returns
    None for those so the caller can re-validate and retry.
    """

    def __init__(self, fix_type):
        self.fix_type = fix_type
        super().__init__(f"Unsupported fix type: {fix_type!r}")
