class ParseError(ValueError):
    """Raised when an IP address, CIDR block or port cannot be parsed."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.message = message
        self.value = value


class ConstraintViolation(Exception):
    """A well-formed value that breaks a relational rule, such as a host
    address inside the DHCP pool. Validators report these as error issues
    instead of raising them."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class EnvFileError(Exception):
    """Raised when a .env file cannot be read."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
