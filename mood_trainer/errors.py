# mood_trainer/errors.py


class MissingColumnError(ValueError):
    def __init__(self, column):
        super().__init__(f"Missing required column: {column}")
        self.column = column


class DatasetUnavailableError(RuntimeError):
    """Raised when a route needs the movie dataset but loading it failed at startup."""


class ModelNotTrainedError(RuntimeError):
    """Raised when predictions are requested before the first training run."""
