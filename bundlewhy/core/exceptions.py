"""BundleWhy custom exceptions."""


class BundleWhyError(Exception):
    """Base exception for BundleWhy errors."""


class StatsFileError(BundleWhyError):
    """Stats file could not be read or is not valid JSON."""


class UnknownModuleError(BundleWhyError):
    """No known module name matches the query."""

    def __init__(self, query: str, available: int) -> None:
        super().__init__(
            f"Cannot find any module matching substring '{query}' (out of {available} available)"
        )
        self.query = query
        self.available = available


class AmbiguousModuleError(BundleWhyError):
    """More than one module name matches the query."""

    def __init__(self, query: str, candidates: list[str]) -> None:
        shown = ", ".join(candidates[:5])
        more = f" and {len(candidates) - 5} more" if len(candidates) > 5 else ""
        super().__init__(f"'{query}' matches {len(candidates)} modules: {shown}{more}")
        self.query = query
        self.candidates = candidates
