# mood_trainer/trainer.py
"""
The preference model behind /train and /predict.

Routes only talk to the PreferenceModel protocol, so the numeric backend can
be swapped. TorchPreferenceNetwork is a small feed-forward network:
one sigmoid hidden layer, a sigmoid output, full-batch SGD with momentum, and
training that stops at an iteration cap or once the mean error is low enough.
"""
import math
import logging
from typing import List, Protocol, Sequence

import torch
import torch.nn as nn
import torch.optim as optim

from .errors import ModelNotTrainedError
from .schemas import FEATURE_NAMES, Features, LayerWeights, TrainingExample, TrainingResult

logger = logging.getLogger(__name__)

MAX_LR_SCALE = 10


class PreferenceModel(Protocol):
    @property
    def trained(self) -> bool: ...

    def train(self, examples: Sequence[TrainingExample]) -> TrainingResult: ...

    def predict(self, features: Features) -> float: ...

    def layers(self) -> List[LayerWeights]: ...


class TorchPreferenceNetwork:
    def __init__(self, hidden_size=3, learning_rate=0.3, momentum=0.1,
                 iterations=2000, error_threshold=0.005, warm_start=True):
        self.hidden_size = hidden_size
        self.learning_rate = learning_rate
        self.momentum = momentum
        self.iterations = iterations
        self.error_threshold = error_threshold
        self.warm_start = warm_start
        self.network = self._build()
        self._trained = False

    @classmethod
    def from_settings(cls, settings):
        return cls(
            hidden_size=settings.hidden_size,
            learning_rate=settings.learning_rate,
            momentum=settings.momentum,
            iterations=settings.train_iterations,
            error_threshold=settings.error_threshold,
            warm_start=settings.warm_start,
        )

    @property
    def trained(self) -> bool:
        return self._trained

    def _build(self):
        return nn.Sequential(
            nn.Linear(len(FEATURE_NAMES), self.hidden_size),
            nn.Sigmoid(),
            nn.Linear(self.hidden_size, 1),
            nn.Sigmoid(),
        )

    def train(self, examples: Sequence[TrainingExample]) -> TrainingResult:
        if not examples:
            raise ValueError("Cannot train on an empty example set")

        if not self.warm_start:
            self.network = self._build()

        inputs = torch.tensor([e.input.vector() for e in examples], dtype=torch.float32)
        targets = torch.tensor([[float(e.output.liked)] for e in examples], dtype=torch.float32)
        # one full-batch step per iteration; the rate grows with the batch, capped
        lr = self.learning_rate * min(len(inputs), MAX_LR_SCALE)
        optimizer = optim.SGD(self.network.parameters(), lr=lr, momentum=self.momentum)
        mse = nn.MSELoss()

        self.network.train()
        error = 1.0
        iteration = 0
        while iteration < self.iterations and error > self.error_threshold:
            iteration += 1
            optimizer.zero_grad()
            loss = mse(self.network(inputs), targets)
            loss.backward()
            optimizer.step()
            error = loss.item()
            if math.isnan(error):
                raise FloatingPointError(f"Training diverged at iteration {iteration}")

        self._trained = True
        logger.debug("Trained on %d examples: error=%.6f iterations=%d", len(inputs), error, iteration)
        return TrainingResult(error=error, iterations=iteration, layers=self.layers())

    def predict(self, features: Features) -> float:
        if not self._trained:
            raise ModelNotTrainedError("Model has not been trained yet.")
        self.network.eval()
        with torch.no_grad():
            out = self.network(torch.tensor(features.vector(), dtype=torch.float32))
        return float(out.item())

    def layers(self) -> List[LayerWeights]:
        # layer 0 is the input layer and carries no parameters
        result = [LayerWeights(layer=0)]
        linears = [m for m in self.network if isinstance(m, nn.Linear)]
        for index, linear in enumerate(linears, start=1):
            result.append(LayerWeights(
                layer=index,
                weights=linear.weight.detach().tolist(),
                biases=linear.bias.detach().tolist(),
            ))
        return result
