from typing import Any


class AutoGenerateError(Exception):
    """Base user-facing error."""


class MalformedPatternError(AutoGenerateError):
    def __init__(self, glob: str, detail: str) -> None:
        self.glob = glob
        self.detail = detail
        super().__init__(f"Malformed pattern ({detail}): {glob!r}")


class DuplicateGenerationError(AutoGenerateError):
    def __init__(self, name: str, existing: Any) -> None:
        self.name = name
        self.existing = existing
        super().__init__(f"Module already generated by {existing!r}: {name}")


class ContextClosedError(AutoGenerateError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Generation context is closed: {name}")


class LoaderSpecError(AutoGenerateError):
    def __init__(self, reference: str, detail: str) -> None:
        self.reference = reference
        self.detail = detail
        super().__init__(f"Cannot load generator ({detail}): {reference}")
