"""Domain exceptions for pipeline and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class _FixedStageError(PipelineStageError):
    """Stage error whose stage name is fixed by the subclass."""

    STAGE = "pipeline"

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        super().__init__(stage=self.STAGE, detail=detail, hint=hint)


class ConfigError(_FixedStageError):
    """Required settings are missing or invalid."""

    STAGE = "config"


class InputFileNotFoundError(_FixedStageError):
    """An input audio file does not exist."""

    STAGE = "inputs"


class UnsupportedFormatError(_FixedStageError):
    """A file extension is outside the supported format set."""

    STAGE = "validate"


class ProbeError(_FixedStageError):
    """Metadata inspection failed or found no audio stream."""

    STAGE = "probe"


class TranscodeError(_FixedStageError):
    """Conversion to the intermediate representation failed."""

    STAGE = "transcode"


class ConcatenationError(_FixedStageError):
    """Final concatenation and encoding failed."""

    STAGE = "concatenate"
