from __future__ import annotations


class SplitError(ValueError):
    pass


class UnknownFieldError(SplitError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown raw input field: {field!r}")
        self.field = field


class UnbalancedSplitError(SplitError):
    pass
