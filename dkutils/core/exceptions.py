# dkutils/core/exceptions.py

class InvalidDateFormatError(ValueError):
    """Raised when a strftime/strptime pattern contains unknown directives."""
    def __init__(self, date_format):
        self.date_format = date_format
        super().__init__(f"Invalid date format: {date_format}")
