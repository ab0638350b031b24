from fastapi import status

class BaseAppException(Exception):
    """Base class for all app-specific exceptions."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

class BusinessValidationException(BaseAppException):
    """Invalid input or business rule violation."""
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)

class ChannelNotFoundException(BaseAppException):
    """No channel record with the requested id."""
    def __init__(self, channel_id: str):
        super().__init__(f"Channel '{channel_id}' not found", status.HTTP_404_NOT_FOUND)
        self.channel_id = channel_id

class PredictionPipelineError(BaseAppException):
    """Failure anywhere between the prediction oracle and the session."""
    def __init__(self, message: str = "AI model processing failed"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)

class OracleInvocationError(PredictionPipelineError):
    """Network, credential or service failure reaching the model."""
    def __init__(self, message: str = "Prediction service call failed"):
        super().__init__(message)

class MissingResponseError(PredictionPipelineError):
    """The model returned no text body."""
    def __init__(self, message: str = "No response from prediction service"):
        super().__init__(message)

class MalformedResponseError(PredictionPipelineError):
    """Text present but not valid JSON or not the expected shape."""
    def __init__(self, message: str = "Malformed response from prediction service", details: list = None):
        super().__init__(message)
        self.details = details or []
