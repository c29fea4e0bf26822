"""Exception hierarchy for docs-ts.

All exceptions inherit from DocsTsError. Problems found while extracting or
checking documentation are collected as plain messages and only turned into
an exception at a pipeline stage boundary (see StageFailedError).
"""


class DocsTsError(Exception):
    """Base exception for all docs-ts errors."""


class ConfigError(DocsTsError):
    """Raised when the docs-ts.json configuration cannot be decoded."""

    def __init__(self, errors: list[str] | tuple[str, ...]):
        self.errors = tuple(errors)
        super().__init__("\n".join(self.errors))


class StageFailedError(DocsTsError):
    """Raised when a pipeline stage finishes with one or more errors.

    Carries every message collected by the stage, in the order they were found.
    """

    def __init__(self, stage: str, errors: list[str] | tuple[str, ...]):
        self.stage = stage
        self.errors = tuple(errors)
        super().__init__(f"{stage} failed with {len(self.errors)} error(s)")
