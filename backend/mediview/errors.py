# domain errors raised by services and converted to http errors by the routers


class MediViewError(Exception):
    """base error carrying a message that is safe to show to the clinician"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PatientNotFoundError(MediViewError):
    def __init__(self, patient_id: str):
        super().__init__(f"Patient with id {patient_id} not found")
        self.patient_id = patient_id


class EmptyInsightResponseError(MediViewError):
    def __init__(self):
        super().__init__("The AI response was empty")


class InsightServiceError(MediViewError):
    """the completion call itself failed"""

    def __init__(self, cause: Exception):
        super().__init__(f"Failed to generate insights: {cause}")
        self.cause = cause


class NoteValidationError(MediViewError):
    def __init__(self, message: str = "Note title and content are required"):
        super().__init__(message)
