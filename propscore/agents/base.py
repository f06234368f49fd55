"""
Agent base class
Wraps one engine call with input/output checks, timing and error logging.
"""

import time
from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from loguru import logger

from propscore.errors import InternalError, PropScoreError, ValidationError

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """
    Agent base class

    Score, risk and rank agents share this wrapper:
    - a missing input is a ValidationError, a missing output an InternalError
    - PropScoreError subclasses are logged as one line and re-raised as is
    - anything else is logged with its traceback and re-raised
    - every successful run logs its duration at debug level
    """

    name: str = "BaseAgent"

    def __init__(self):
        self.logger = logger.bind(agent=self.name)

    def run(self, input_data: InputT) -> OutputT:
        started = time.perf_counter()
        try:
            self._validate_input(input_data)
            result = self._process(input_data)
            self._validate_output(result)

        except PropScoreError as e:
            self.logger.error(f"{self.name} failed: {e}")
            raise

        except Exception:
            self.logger.opt(exception=True).error(f"{self.name} crashed")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.logger.debug(f"{self.name} done in {elapsed_ms:.1f} ms")
        return result

    @abstractmethod
    def _process(self, input_data: InputT) -> OutputT:
        """Engine call (implemented by subclasses)"""

    def _validate_input(self, input_data: InputT) -> None:
        if input_data is None:
            raise ValidationError(f"{self.name}: no input")

    def _validate_output(self, output_data: OutputT) -> None:
        if output_data is None:
            raise InternalError(f"{self.name}: engine returned nothing")
