"""Custom exceptions for the inspection composite renderer."""

from typing import Optional


class InspectionCompositeError(Exception):
    """Base exception for all library errors.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for programmatic handling
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(InspectionCompositeError):
    """Error in configuration or settings.

    Attributes:
        config_key: The configuration key that caused the error (if applicable)
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, error_code="CONFIG_ERROR")
        self.config_key = config_key


class InvalidImageDimensions(InspectionCompositeError):
    """Zero or negative width/height handed to the layout engine.

    Attributes:
        dimensions: The offending (source_w, source_h, detail_w, detail_h)
    """

    def __init__(self, message: str, dimensions: Optional[tuple[int, ...]] = None):
        super().__init__(message, error_code="DIMENSION_ERROR")
        self.dimensions = dimensions


class ImageDecodeError(InspectionCompositeError):
    """Bitmap bytes could not be decoded.

    Attributes:
        image_path: Path to the image being decoded (None for in-memory bytes)
    """

    def __init__(self, message: str, image_path: Optional[str] = None):
        super().__init__(message, error_code="DECODE_ERROR")
        self.image_path = image_path

    def __str__(self) -> str:
        if self.image_path:
            return f"{super().__str__()} (image: {self.image_path})"
        return super().__str__()


class MissingSourceFile(InspectionCompositeError):
    """Input path does not exist.

    Attributes:
        image_path: The missing path
    """

    def __init__(self, message: str, image_path: Optional[str] = None):
        super().__init__(message, error_code="MISSING_FILE")
        self.image_path = image_path

    def __str__(self) -> str:
        if self.image_path:
            return f"{super().__str__()} (image: {self.image_path})"
        return super().__str__()


class ImageEncodeError(InspectionCompositeError):
    """Failure encoding or writing the composite.

    Attributes:
        output_path: Destination that could not be written
    """

    def __init__(self, message: str, output_path: Optional[str] = None):
        super().__init__(message, error_code="ENCODE_ERROR")
        self.output_path = output_path
