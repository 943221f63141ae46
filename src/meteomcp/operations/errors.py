"""Error type for the operation set boundary."""


class OperationError(Exception):
    """An upstream weather-data call failed.

    Network errors, non-success HTTP statuses and undecodable payloads all
    collapse into this single type.
    """

    def __init__(self, endpoint: str, detail: str = "") -> None:
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"Upstream call failed: {endpoint}" + (f": {detail}" if detail else ""))
