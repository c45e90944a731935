from typing import Optional


class FlashquizError(Exception):
    """Base exception for flashquiz errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class CardStoreError(FlashquizError):
    """Raised for rejected card store mutations."""

    pass


class DuplicateTermError(CardStoreError):
    """Raised when adding a card whose term is already in the store."""

    def __init__(self, term: str):
        super().__init__(f'The card "{term}" already exists.')
        self.term = term


class DuplicateDefinitionError(CardStoreError):
    """Raised when adding a card whose definition is already in the store."""

    def __init__(self, definition: str):
        super().__init__(f'The definition "{definition}" already exists.')
        self.definition = definition


class CardNotFoundError(CardStoreError):
    """Raised when no card has the requested term."""

    def __init__(self, term: str):
        super().__init__(f'Can\'t remove "{term}": there is no such card.')
        self.term = term


class QuizError(FlashquizError):
    """Raised when a quiz cannot be run."""

    pass


class InsufficientCardsError(QuizError):
    """Raised when a quiz is requested on an empty store."""

    pass


class InvalidTrialCountError(QuizError):
    """Raised for a trial count that is not a non-negative integer."""

    pass


class CardFileError(FlashquizError):
    """Raised when a card file or log file cannot be opened or written."""

    pass


class CardFileNotFoundError(CardFileError):
    """Raised when the file to import does not exist."""

    pass


class MalformedRecordError(CardFileError):
    """Indicates a data line that does not match the card file format."""

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"Line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


class InputExhaustedError(FlashquizError):
    """Raised when the input channel reaches end of input."""

    pass
