# mood_trainer/store.py

from typing import List

from .schemas import Features, Label, TrainingExample


class FeedbackStore:
    """Append-only, process-lifetime list of labeled training examples."""

    def __init__(self):
        self._examples: List[TrainingExample] = []

    def __len__(self):
        return len(self._examples)

    def add_pair(self, preferred: Features, not_preferred: Features) -> int:
        self._examples.append(TrainingExample(input=preferred.model_copy(), output=Label(liked=1)))
        self._examples.append(TrainingExample(input=not_preferred.model_copy(), output=Label(liked=0)))
        return len(self._examples)

    def examples(self) -> List[TrainingExample]:
        return list(self._examples)

    def stats(self):
        liked = sum(1 for e in self._examples if e.output.liked)
        return {
            "examples": len(self._examples),
            "liked": liked,
            "disliked": len(self._examples) - liked,
        }
