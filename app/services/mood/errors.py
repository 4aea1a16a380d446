class SourceFormatError(ValueError):
    """A profile row or record is structurally unusable."""

    def __init__(self, message: str, row_number: int | None = None):
        super().__init__(message)
        self.row_number = row_number
