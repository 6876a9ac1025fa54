class ActivitySourceError(Exception):
    """Raised when study activity cannot be loaded from its source."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source
