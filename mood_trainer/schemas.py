from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

FEATURE_NAMES = ("sentiment", "valence", "arousal", "dominance", "tempo")


class MovieRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    sentiment: float
    valence: float
    arousal: float
    dominance: float
    tempo: float


class Features(BaseModel):
    # extra keys (e.g. a whole MovieRecord with its text) are ignored
    sentiment: float
    valence: float
    arousal: float
    dominance: float
    tempo: float

    def vector(self) -> List[float]:
        return [getattr(self, name) for name in FEATURE_NAMES]


class FeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preferred: Optional[Features] = Field(default=None, alias="preferredText")
    not_preferred: Optional[Features] = Field(default=None, alias="notPreferredText")


class Label(BaseModel):
    liked: int  # 1 = preferred, 0 = not preferred


class TrainingExample(BaseModel):
    input: Features
    output: Label


class LayerWeights(BaseModel):
    layer: int
    weights: Optional[List[List[float]]] = None
    biases: Optional[List[float]] = None


class TrainingResult(BaseModel):
    error: float
    iterations: int
    layers: List[LayerWeights]


class Prediction(BaseModel):
    liked: float
